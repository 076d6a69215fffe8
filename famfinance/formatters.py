"""Formatting utilities for currency, numbers, dates and enum labels.

All output follows Brazilian Portuguese conventions: ``.`` groups thousands,
``,`` separates decimals and amounts are shown in reais (``R$``). Month names
and date patterns come from Babel's ``pt_BR`` locale data.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Dict, Union

import pandas as pd
from babel.dates import format_date as babel_format_date

DateInput = Union[date, datetime, str]

CURRENCY_SYMBOL = 'R$'
# Non-breaking space between symbol and amount, as browsers render pt-BR.
CURRENCY_SPACE = '\xa0'

LOCALE = 'pt_BR'

# CLDR patterns; month names come from Babel's pt_BR locale data.
DATE_PATTERNS: Dict[str, str] = {
    'short': 'dd/MM',
    'medium': "dd 'de' MMM 'de' y",
    'long': "dd 'de' MMMM 'de' y",
}


def _to_datetime(value: DateInput) -> datetime:
    if isinstance(value, str):
        return pd.to_datetime(value).to_pydatetime()
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _localize_number(value: float, decimals: int) -> str:
    """Render ``value`` with pt-BR separators (``1.234,56``)."""
    formatted = f"{value:,.{decimals}f}"
    return formatted.replace(',', '\0').replace('.', ',').replace('\0', '.')


# Currency formatting


def format_currency(value: float, decimals: int = 2) -> str:
    """Format an amount in reais.

    Example:
        >>> format_currency(1234.56)
        'R$\\xa01.234,56'
        >>> format_currency(-10)
        '-R$\\xa010,00'
    """
    sign = '-' if value < 0 and round(abs(value), decimals) != 0 else ''
    return f"{sign}{CURRENCY_SYMBOL}{CURRENCY_SPACE}{_localize_number(abs(value), decimals)}"


def format_currency_compact(value: float) -> str:
    """Abbreviate thousands and millions, e.g. ``R$ 12.5K``."""
    if abs(value) >= 1_000_000:
        return f"{CURRENCY_SYMBOL} {value / 1_000_000:.1f}M"
    if abs(value) >= 1_000:
        return f"{CURRENCY_SYMBOL} {value / 1_000:.1f}K"
    return format_currency(value)


def format_currency_with_sign(value: float) -> str:
    sign = '+' if value >= 0 else ''
    return f"{sign}{format_currency(value)}"


# Percentage formatting


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_percentage_with_sign(value: float, decimals: int = 1) -> str:
    sign = '+' if value >= 0 else ''
    return f"{sign}{value:.{decimals}f}%"


# Number formatting


def format_number(value: float, decimals: int = 0) -> str:
    """Format a plain number with pt-BR separators.

    Example:
        >>> format_number(1234567)
        '1.234.567'
    """
    return _localize_number(value, decimals)


def format_compact_number(value: float) -> str:
    if abs(value) >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if abs(value) >= 1_000:
        return f"{value / 1_000:.1f}K"
    return format_number(value)


# Date formatting


def format_date(value: DateInput, style: str = 'medium') -> str:
    """Format a date as ``short`` (15/01), ``medium`` (15 de jan. de 2024)
    or ``long`` (15 de janeiro de 2024).

    Raises:
        ValueError: If ``style`` is not one of the three styles.
    """
    pattern = DATE_PATTERNS.get(style)
    if pattern is None:
        raise ValueError(f"Unknown date style '{style}'")
    return babel_format_date(_to_datetime(value), pattern, locale=LOCALE)


def format_date_time(value: DateInput) -> str:
    d = _to_datetime(value)
    return f"{format_date(d, 'medium')}, {d.hour:02d}:{d.minute:02d}"


def format_relative_date(value: DateInput, now: datetime | None = None) -> str:
    """Describe how long ago ``value`` was (Hoje, Ontem, 3 dias atrás...).

    Dates in the future are reported as ``Hoje``.
    """
    d = _to_datetime(value)
    if now is None:
        now = datetime.now(d.tzinfo) if d.tzinfo else datetime.now()
    diff_days = math.floor((now - d).total_seconds() / 86400)

    if diff_days <= 0:
        return 'Hoje'
    if diff_days == 1:
        return 'Ontem'
    if diff_days < 7:
        return f"{diff_days} dias atrás"
    if diff_days < 30:
        weeks = diff_days // 7
        return f"{weeks} semana{'s' if weeks > 1 else ''} atrás"
    if diff_days < 365:
        months = diff_days // 30
        return f"{months} {'meses' if months > 1 else 'mês'} atrás"
    years = diff_days // 365
    return f"{years} ano{'s' if years > 1 else ''} atrás"


def format_month_year(value: DateInput) -> str:
    """e.g. ``junho de 2024``."""
    return babel_format_date(_to_datetime(value), "MMMM 'de' y", locale=LOCALE)


def format_year_month(value: date) -> str:
    """Key used for monthly budgets, e.g. ``2024-06``."""
    return f"{value.year}-{value.month:02d}"


def parse_year_month(text: str) -> date:
    """Parse a ``YYYY-MM`` key into the first day of that month.

    Raises:
        ValueError: If the text is not a valid ``YYYY-MM`` key.
    """
    parts = text.strip().split('-')
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Expected YYYY-MM, got '{text}'")
    return date(int(parts[0]), int(parts[1]), 1)


# Enum labels

TRANSACTION_TYPE_LABELS: Dict[str, str] = {
    'ENTRADA': 'Receita',
    'SAIDA': 'Despesa',
    'TRANSFERENCIA': 'Transferência',
    'INVESTIMENTO': 'Investimento',
}

INVESTMENT_TYPE_LABELS: Dict[str, str] = {
    'RENDA_FIXA': 'Renda Fixa',
    'RENDA_VARIAVEL': 'Renda Variável',
    'CRIPTO': 'Criptomoedas',
    'FUNDO': 'Fundos',
    # UI-side keys used by Investment.investment_type
    'stocks': 'Ações',
    'bonds': 'Renda Fixa',
    'crypto': 'Criptomoedas',
    'real_estate': 'Imóveis',
    'funds': 'Fundos',
    'other': 'Outros',
}

ACCOUNT_TYPE_LABELS: Dict[str, str] = {
    'CORRENTE': 'Conta Corrente',
    'POUPANCA': 'Poupança',
    'CARTAO_CREDITO': 'Cartão de Crédito',
    'INVESTIMENTO': 'Investimento',
}

CATEGORY_GROUP_LABELS: Dict[str, str] = {
    'ESSENCIAL': 'Essencial (50%)',
    'LIVRE': 'Livre (30%)',
    'INVESTIMENTO': 'Investimento (20%)',
}

GOAL_TYPE_LABELS: Dict[str, str] = {
    'ECONOMIA_CATEGORIA': 'Economia por Categoria',
    'INVESTIMENTO_MENSAL': 'Investimento Mensal',
    'PATRIMONIO': 'Patrimônio Total',
    'REGRA_PERCENTUAL': 'Regra de Percentual',
}


def format_transaction_type(kind: str) -> str:
    return TRANSACTION_TYPE_LABELS.get(kind, kind)


def format_investment_type(kind: str) -> str:
    return INVESTMENT_TYPE_LABELS.get(kind, kind)


def format_account_type(kind: str) -> str:
    return ACCOUNT_TYPE_LABELS.get(kind, kind)


def format_category_group(group: str) -> str:
    return CATEGORY_GROUP_LABELS.get(group, group)


def format_goal_type(kind: str) -> str:
    return GOAL_TYPE_LABELS.get(kind, kind)
