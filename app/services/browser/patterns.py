"""
Tabela declarativa de padrões de navegação.

Cada passo é localizado por um padrão textual (alternância de termos,
case-insensitive). Mudanças de markup nos sites alvo devem ser corrigidas
aqui, não nos serviços.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern


@dataclass(frozen=True)
class ClickRule:
    """Elemento clicável: papel (link/button) + padrão do nome acessível."""
    step: str
    role: str
    pattern: str

    @property
    def regex(self) -> Pattern:
        return re.compile(self.pattern, re.IGNORECASE)


@dataclass(frozen=True)
class FieldRule:
    """Campo de entrada: padrão do label e padrão do placeholder."""
    step: str
    label_pattern: str
    placeholder_pattern: Optional[str] = None

    @property
    def label_regex(self) -> Pattern:
        return re.compile(self.label_pattern, re.IGNORECASE)

    @property
    def placeholder_regex(self) -> Pattern:
        return re.compile(self.placeholder_pattern or self.label_pattern, re.IGNORECASE)


CLICK_RULES: Dict[str, ClickRule] = {rule.step: rule for rule in (
    # Genérico
    ClickRule("search", "button", r"buscar|pesquisar|aplicar|ver"),

    # Radar
    ClickRule("radar.opportunities", "link", r"negócios|oportunidades"),
    ClickRule("radar.demographics", "link", r"público|consumidor|demografia"),
    ClickRule("radar.competition", "link", r"concorr(ê|e)ncia|empresas|estabelecimentos"),

    # Planejadora
    ClickRule("planejadora.entry", "link", r"planejadora|planejar|planejamento|come(ç|c)ar|iniciar"),

    # PNBox
    ClickRule("pnbox.entry", "link", r"plano de neg(ó|o)cio|come(ç|c)ar|iniciar|criar"),
)}

FIELD_RULES: Dict[str, FieldRule] = {rule.step: rule for rule in (
    FieldRule("uf", r"UF", r"UF"),
    FieldRule("municipio", r"Munic|Cidade", r"Munic|Cidade"),
    FieldRule("setor", r"Setor|Segmento", r"Setor|Segmento"),
    FieldRule("termo", r"Busca|Pesquisar|Termo", r"Buscar|Pesquisar"),
    FieldRule("cnae", r"CNAE|Atividade", r"CNAE|Atividade"),
    FieldRule("raio_km", r"raio|dist(â|a)ncia", r"km"),
    FieldRule("segmento", r"Segmento|Ramo|Setor", r"Segmento|Ramo|Setor"),
)}


def click_rule(step: str) -> ClickRule:
    return CLICK_RULES[step]


def field_rule(step: str) -> FieldRule:
    return FIELD_RULES[step]


def label_rule(step: str, label: str, role: str = "link") -> ClickRule:
    """Regra ad hoc para um rótulo literal vindo da requisição (ex.: nome da etapa)."""
    return ClickRule(step, role, re.escape(label.strip()))
