"""
Testes unitários para os extratores (tabela x cards, limites, regras de descarte).
"""

import pytest

from app.schemas.records import Block, CardRecord, CompanyCard, RowRecord
from app.services.browser.extractors import (
    BLOCK_SELECTOR,
    HIGHLIGHT_SELECTOR,
    PANEL_SELECTOR,
    extract_blocks,
    extract_cards,
    extract_company_cards,
    extract_panels,
    extract_rows,
    extract_table_or,
)
from tests.fakes import FakeElement, FakePage, card, heading, row


def section(title=None, body="", values=(), selector=PANEL_SELECTOR):
    children = [heading(title)] if title is not None else []
    children.extend(FakeElement(v, selectors={HIGHLIGHT_SELECTOR}) for v in values)
    text = "\n".join(p for p in (title, *values, body) if p)
    return FakeElement(text, selectors={selector}, children=children)


class TestRows:

    @pytest.mark.asyncio
    async def test_rows_collect_cells_in_order(self):
        page = FakePage(row("Empresa A", "Campinas", "6201-5"), row("Empresa B", "Sumaré", "6202-3"))
        rows = await extract_rows(page, 10)

        assert rows == [
            RowRecord(cols=["Empresa A", "Campinas", "6201-5"]),
            RowRecord(cols=["Empresa B", "Sumaré", "6202-3"]),
        ]

    @pytest.mark.asyncio
    async def test_rows_capped(self):
        page = FakePage(*[row(str(i)) for i in range(150)])
        assert len(await extract_rows(page, 100)) == 100
        assert len(await extract_rows(page, 60)) == 60

    @pytest.mark.asyncio
    async def test_row_with_broken_cells_yields_empty_cols(self):
        broken = FakeElement("x", selectors={"table tbody tr"}, children=[FakeElement("a", selectors={"td"}, broken=True)])
        page = FakePage(broken, row("ok"))

        rows = await extract_rows(page, 10)
        assert rows == [RowRecord(cols=[]), RowRecord(cols=["ok"])]

    @pytest.mark.asyncio
    async def test_locate_failure_yields_empty(self):
        page = FakePage(row("a"), fail_locate=True)
        assert await extract_rows(page, 10) == []


class TestCards:

    @pytest.mark.asyncio
    async def test_cards_title_and_text(self):
        page = FakePage(card("  Edital Inovação  ", "Prazo 10/10"))
        cards = await extract_cards(page, 60)

        assert cards == [CardRecord(title="Edital Inovação", text="Edital Inovação  \nPrazo 10/10")]

    @pytest.mark.asyncio
    async def test_card_without_heading_kept_with_text(self):
        page = FakePage(card(None, "Só texto"))
        assert await extract_cards(page, 60) == [CardRecord(title=None, text="Só texto")]

    @pytest.mark.asyncio
    async def test_empty_card_dropped(self):
        page = FakePage(card(None, "   "), card("Título", ""))
        cards = await extract_cards(page, 60)

        assert len(cards) == 1
        assert cards[0].title == "Título"

    @pytest.mark.asyncio
    async def test_cards_capped_before_filtering(self):
        page = FakePage(*[card(f"Card {i}") for i in range(80)])
        assert len(await extract_cards(page, 60)) == 60

    @pytest.mark.asyncio
    async def test_card_text_limit(self):
        page = FakePage(card(None, "x" * 3000))
        cards = await extract_cards(page, 10, text_limit=1200)
        assert len(cards[0].text) == 1200

    @pytest.mark.asyncio
    async def test_company_cards_split_lines(self):
        page = FakePage(card("ACME Ltda", "  Rua A, 10 \n\n  Tel 1234  "))
        companies = await extract_company_cards(page, 100)

        assert companies == [CompanyCard(titulo="ACME Ltda", linhas=["ACME Ltda", "Rua A, 10", "Tel 1234"])]

    @pytest.mark.asyncio
    async def test_company_card_empty_dropped(self):
        page = FakePage(card(None, "\n \n"))
        assert await extract_company_cards(page, 100) == []


class TestPanels:

    @pytest.mark.asyncio
    async def test_panel_with_values(self):
        page = FakePage(section("População", values=[" 1.200.000 ", "", "52% mulheres"]))
        panels = await extract_panels(page)

        assert len(panels) == 1
        assert panels[0].titulo == "População"
        assert panels[0].valores == ["1.200.000", "52% mulheres"]
        assert panels[0].texto.startswith("População")

    @pytest.mark.asyncio
    async def test_panel_without_heading_dropped(self):
        page = FakePage(section(None, body="texto solto", values=["10"]))
        assert await extract_panels(page) == []

    @pytest.mark.asyncio
    async def test_panel_text_limit_1500(self):
        page = FakePage(section("Renda", body="y" * 5000))
        panels = await extract_panels(page)
        assert len(panels[0].texto) == 1500

    @pytest.mark.asyncio
    async def test_panels_cap_40(self):
        page = FakePage(*[section(f"Painel {i}", values=["1"]) for i in range(55)])
        panels = await extract_panels(page)
        assert len(panels) == 40

    @pytest.mark.asyncio
    async def test_panels_cap_counts_only_kept(self):
        """Seções descartadas não consomem o limite."""
        sections = [section(None, body="sem título") for _ in range(10)]
        sections += [section(f"P{i}", values=["1"]) for i in range(5)]
        panels = await extract_panels(FakePage(*sections), cap=5)
        assert [p.titulo for p in panels] == ["P0", "P1", "P2", "P3", "P4"]


class TestBlocks:

    @pytest.mark.asyncio
    async def test_blocks_title_text_limit(self):
        page = FakePage(card("Mercado", "z" * 2000, selectors=(BLOCK_SELECTOR,)))
        blocks = await extract_blocks(page)

        assert blocks[0].titulo == "Mercado"
        assert len(blocks[0].texto) == 1200

    @pytest.mark.asyncio
    async def test_blocks_drop_empty(self):
        page = FakePage(card(None, "", selectors=(BLOCK_SELECTOR,)))
        assert await extract_blocks(page) == []

    @pytest.mark.asyncio
    async def test_card_nested_in_section_not_repeated(self):
        """Card dentro de seção já está no texto da seção: vira um bloco só."""
        nested = card("Clientes", "Quem compra", selectors=(BLOCK_SELECTOR,))
        section = FakeElement(
            "Mercado\nClientes\nQuem compra",
            selectors={BLOCK_SELECTOR},
            children=[heading("Mercado"), nested],
        )
        page = FakePage(section, card("Fornecedores", "Lista", selectors=(BLOCK_SELECTOR,)))

        blocks = await extract_blocks(page)

        assert [b.titulo for b in blocks] == ["Mercado", "Fornecedores"]
        assert blocks[0].texto == "Mercado\nClientes\nQuem compra"

    @pytest.mark.asyncio
    async def test_nested_duplicates_do_not_consume_cap(self):
        def section(i):
            nested = card(f"Card {i}", "detalhe", selectors=(BLOCK_SELECTOR,))
            return FakeElement(
                f"Seção {i}:\nCard {i}\ndetalhe",
                selectors={BLOCK_SELECTOR},
                children=[heading(f"Seção {i}:"), nested],
            )

        blocks = await extract_blocks(FakePage(*[section(i) for i in range(70)]), cap=60)

        assert len(blocks) == 60
        assert all(b.titulo.startswith("Seção") for b in blocks)


class TestTableOrFallback:

    @pytest.mark.asyncio
    async def test_rows_take_precedence_fallback_not_called(self):
        page = FakePage(row("linha"), card("Card", "texto"))
        called = []

        async def fallback():
            called.append(True)
            return await extract_cards(page, 60)

        records = await extract_table_or(page, 60, fallback)

        assert records == [RowRecord(cols=["linha"])]
        assert called == []

    @pytest.mark.asyncio
    async def test_fallback_when_no_rows(self):
        page = FakePage(card("Card", "texto"))
        records = await extract_table_or(page, 60, lambda: extract_cards(page, 60))
        assert records == [CardRecord(title="Card", text="Card\ntexto")]

    @pytest.mark.asyncio
    async def test_fallback_output_capped(self):
        page = FakePage()

        async def fallback():
            return [Block(titulo=str(i)) for i in range(10)]

        assert len(await extract_table_or(page, 3, fallback)) == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
