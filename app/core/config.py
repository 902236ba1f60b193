import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Sites alvo
    RADAR_ORIGIN: str = os.getenv("RADAR_ORIGIN", "https://www.radarsebrae.com.br")
    PLANEJADORA_ORIGIN: str = os.getenv("PLANEJADORA_ORIGIN", "https://planejadora.sebrae.com.br")
    PNBOX_ORIGIN: str = os.getenv("PNBOX_ORIGIN", "https://pnbox.sebrae.com.br")

    # Navegador (fixo por deploy, nunca por requisição)
    BROWSER_HEADLESS: bool = _env_bool("BROWSER_HEADLESS", True)
    BROWSER_VIEWPORT_WIDTH: int = int(os.getenv("BROWSER_VIEWPORT_WIDTH", "1366"))
    BROWSER_VIEWPORT_HEIGHT: int = int(os.getenv("BROWSER_VIEWPORT_HEIGHT", "900"))
    BROWSER_USER_AGENT: str = os.getenv("BROWSER_USER_AGENT", "Mozilla/5.0 Chrome")
    # Flags para containers restritos: sem sandbox nativo e sem /dev/shm
    BROWSER_LAUNCH_ARGS: tuple = ("--no-sandbox", "--disable-dev-shm-usage")

    # Timeouts do Playwright (ms). Os defaults são os da própria ferramenta.
    NETWORK_IDLE_TIMEOUT_MS: int = int(os.getenv("NETWORK_IDLE_TIMEOUT_MS", "30000"))
    ACTION_TIMEOUT_MS: int = int(os.getenv("ACTION_TIMEOUT_MS", "30000"))

    # Retry
    SCRAPE_MAX_RETRIES: int = int(os.getenv("SCRAPE_MAX_RETRIES", "2"))

    # Rate limit por cliente
    RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "20"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    MAX_BODY_BYTES: int = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))

    # Planilhas e PDFs
    ASSETS_DIR: str = os.getenv("ASSETS_DIR", "assets")
    FINANCE_WORKBOOK: str = os.getenv("FINANCE_WORKBOOK", "financeiro.xlsx")

    # Logs
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "")

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))


settings = Settings()
