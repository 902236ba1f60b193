"""
Testes do fluxo da Planejadora e do PNBox com sessões falsas.
"""

import pytest

from app.schemas.planning import PlanejadoraQuery, PNBoxQuery
from app.schemas.records import Block, RowRecord
from app.services.browser import BrowserSession, SessionConfig
from app.services.browser.extractors import BLOCK_SELECTOR
from app.services.planning import open_stage, scrape_planejadora, scrape_pnbox
from tests.fakes import DriverFactory, FakeElement, FakePage, card, row


def session_factory(factory):
    return lambda config: BrowserSession(config, playwright_factory=factory)


def block(title, body):
    return card(title, body, selectors=(BLOCK_SELECTOR,))


@pytest.mark.usefixtures("fast_timeouts")
class TestPlanejadora:

    @pytest.mark.asyncio
    async def test_stage_blocks(self):
        def page():
            return FakePage(
                FakeElement("Começar planejamento", role="link"),
                FakeElement("Análise de Mercado", role="tab"),
                FakeElement("", role="textbox", label="UF"),
                FakeElement("Aplicar", role="button"),
                block("Clientes", "Quem compra"),
                block("Fornecedores", "x" * 2000),
            )

        factory = DriverFactory(page_factory=page)
        query = PlanejadoraQuery(uf="MG", etapa="análise de mercado")
        result = await scrape_planejadora(
            query, config=SessionConfig(), origin="https://plan.example",
            session_factory=session_factory(factory),
        )

        assert result.origem == "planejadora"
        assert result.filtros.model_dump() == {"uf": "MG", "municipio": None, "termo": None, "etapa": "análise de mercado"}
        assert result.blocos[0] == Block(titulo="Clientes", texto="Clientes\nQuem compra")
        assert len(result.blocos[1].texto) == 1200

        actions = factory.drivers[0].page.actions
        assert actions[0] == ("click", "link", "Começar planejamento")
        assert ("click", "tab", "Análise de Mercado") in actions
        assert ("fill", "UF", "MG") in actions

    @pytest.mark.asyncio
    async def test_table_wins(self):
        factory = DriverFactory(page_factory=lambda: FakePage(row("Etapa 1", "ok"), block("B", "b")))
        result = await scrape_planejadora(
            PlanejadoraQuery(uf="SP"), config=SessionConfig(), session_factory=session_factory(factory),
        )
        assert result.blocos == [RowRecord(cols=["Etapa 1", "ok"])]

    def test_uf_required(self):
        with pytest.raises(ValueError):
            PlanejadoraQuery.model_validate({"municipio": "Campinas"})


@pytest.mark.usefixtures("fast_timeouts")
class TestPNBox:

    @pytest.mark.asyncio
    async def test_sections_with_all_optional_fields(self):
        def page():
            return FakePage(
                FakeElement("Criar plano de negócio", role="button"),
                FakeElement("Plano de Marketing", role="link"),
                FakeElement("", role="textbox", label="Ramo de atividade"),
                *[block(f"Seção {i}", "conteúdo") for i in range(70)],
            )

        factory = DriverFactory(page_factory=page)
        query = PNBoxQuery.model_validate({"segment": "Alimentação", "stage": "Plano de Marketing"})
        result = await scrape_pnbox(query, config=SessionConfig(), session_factory=session_factory(factory))

        assert result.origem == "pnbox"
        assert result.filtros.segmento == "Alimentação"
        assert result.filtros.uf is None
        assert len(result.secoes) == 60

        actions = factory.drivers[0].page.actions
        assert ("click", "link", "Plano de Marketing") in actions
        assert ("fill", "Ramo de atividade", "Alimentação") in actions
        # Sem UF/município, os campos nem são tentados
        assert not any(a[0] == "fill" and a[2] is None for a in actions)

    @pytest.mark.asyncio
    async def test_empty_query(self):
        factory = DriverFactory()
        result = await scrape_pnbox(PNBoxQuery(), config=SessionConfig(), session_factory=session_factory(factory))
        assert result.secoes == []
        assert result.filtros.model_dump() == {
            "uf": None, "municipio": None, "segmento": None, "termo": None, "etapa": None,
        }


@pytest.mark.usefixtures("fast_timeouts")
class TestOpenStage:

    @pytest.mark.asyncio
    async def test_stage_label_is_literal(self):
        """Rótulo com caracteres especiais de regex é tratado literalmente."""
        page = FakePage(FakeElement("Custos (fixos)", role="button"), FakeElement("Custos fixos", role="link"))
        result = await open_stage(page, "Custos (fixos)", "stage")

        assert result.applied
        assert page.actions == [("click", "button", "Custos (fixos)")]

    @pytest.mark.asyncio
    async def test_missing_stage_skipped(self):
        page = FakePage()
        result = await open_stage(page, None, "stage")
        assert result.applied is False
        assert page.idle_waits == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
