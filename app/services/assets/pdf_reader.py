"""
Extração de texto de PDFs via pdfplumber, mais links e trechos por palavra-chave.
"""

import re
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pdfplumber

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"https?://[^\s<>\"'()\[\]{}]+", re.IGNORECASE)
_TRAILING_PUNCT = ".,;:!?"

DEFAULT_KEYWORDS = ("prazo", "inscri", "edital", "valor", "contato", "site")
MAX_SNIPPETS = 50
SNIPPET_MAX_CHARS = 300


def extract_text(path: Path) -> Dict[str, Any]:
    """Texto completo, número de páginas e metadados do documento."""
    with pdfplumber.open(str(path)) as pdf:
        pages = []
        for page in pdf.pages:
            pages.append(page.extract_text() or "")
        metadata = {k: str(v) for k, v in (pdf.metadata or {}).items()}
        page_count = len(pdf.pages)

    logger.debug(f"📄 {path.name}: {page_count} páginas")
    return {
        "arquivo": path.name,
        "paginas": page_count,
        "metadados": metadata,
        "texto": "\n".join(pages),
    }


def extract_links(text: str) -> List[str]:
    """URLs http(s) do texto, sem repetição, na ordem em que aparecem."""
    seen = set()
    links = []
    for match in URL_RE.finditer(text or ""):
        url = match.group(0).rstrip(_TRAILING_PUNCT)
        if url and url not in seen:
            seen.add(url)
            links.append(url)
    return links


def keyword_snippets(text: str, keywords: Iterable[str] = DEFAULT_KEYWORDS, limit: int = MAX_SNIPPETS) -> List[Dict[str, str]]:
    """Linhas que contêm alguma das palavras-chave (case-insensitive)."""
    terms = [k.strip().lower() for k in keywords if k and k.strip()]
    if not terms:
        return []

    snippets = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue
        lowered = line.lower()
        hit = next((term for term in terms if term in lowered), None)
        if hit:
            snippets.append({"palavra": hit, "trecho": line[:SNIPPET_MAX_CHARS]})
            if len(snippets) >= limit:
                break
    return snippets


def extract_links_report(path: Path, keywords: Iterable[str] = DEFAULT_KEYWORDS) -> Dict[str, Any]:
    document = extract_text(path)
    return {
        "arquivo": document["arquivo"],
        "paginas": document["paginas"],
        "links": extract_links(document["texto"]),
        "trechos": keyword_snippets(document["texto"], keywords),
    }
