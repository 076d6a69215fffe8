"""Colour palettes for charts and transaction indicators."""

from __future__ import annotations

import re
from typing import Dict, List

NEUTRAL = 'hsl(215, 16%, 47%)'

SEMANTIC_COLORS: Dict[str, Dict[str, str]] = {
    'income': {
        'default': 'hsl(160, 84%, 39%)',
        'light': 'hsl(160, 84%, 45%)',
        'dark': 'hsl(161, 94%, 30%)',
        'bg': 'hsla(160, 84%, 39%, 0.1)',
    },
    'expense': {
        'default': 'hsl(0, 84%, 60%)',
        'light': 'hsl(0, 84%, 65%)',
        'dark': 'hsl(0, 84%, 50%)',
        'bg': 'hsla(0, 84%, 60%, 0.1)',
    },
    'investment': {
        'default': 'hsl(217, 91%, 60%)',
        'light': 'hsl(217, 91%, 65%)',
        'dark': 'hsl(217, 91%, 50%)',
        'bg': 'hsla(217, 91%, 60%, 0.1)',
    },
    'success': {
        'default': 'hsl(142, 71%, 45%)',
        'light': 'hsl(142, 71%, 50%)',
        'dark': 'hsl(142, 71%, 40%)',
        'bg': 'hsla(142, 71%, 45%, 0.1)',
    },
    'warning': {
        'default': 'hsl(38, 92%, 50%)',
        'light': 'hsl(38, 92%, 55%)',
        'dark': 'hsl(38, 92%, 45%)',
        'bg': 'hsla(38, 92%, 50%, 0.1)',
    },
}

CHART_PALETTE: List[str] = [
    'hsl(160, 84%, 39%)',
    'hsl(217, 91%, 60%)',
    'hsl(38, 92%, 50%)',
    'hsl(0, 84%, 60%)',
    'hsl(142, 71%, 45%)',
    'hsl(270, 70%, 60%)',
    'hsl(180, 70%, 45%)',
    'hsl(330, 80%, 55%)',
]

# One colour per 50/30/20 group.
BUDGET_GROUP_COLORS: Dict[str, str] = {
    'essentials': 'hsl(217, 91%, 60%)',
    'lifestyle': 'hsl(330, 80%, 55%)',
    'investments': 'hsl(142, 71%, 45%)',
}

HEALTH_STATUS_COLORS: Dict[str, str] = {
    'on_track': SEMANTIC_COLORS['success']['default'],
    'attention': SEMANTIC_COLORS['warning']['default'],
    'risk': SEMANTIC_COLORS['expense']['default'],
}

_TRANSACTION_KIND = {
    'income': 'income',
    'RECEITA': 'income',
    'expense': 'expense',
    'DESPESA': 'expense',
    'INVESTIMENTO': 'investment',
}

_LIGHTNESS_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*%\s*(?:,\s*[\d.]+\s*)?\)')


def transaction_color(kind: str, background: bool = False) -> str:
    """Colour for a transaction type; neutral grey for unknown types."""
    semantic = _TRANSACTION_KIND.get(kind)
    if semantic is None:
        return NEUTRAL
    return SEMANTIC_COLORS[semantic]['bg' if background else 'default']


def palette(size: int) -> List[str]:
    """Return ``size`` chart colours, cycling through the palette."""
    return [CHART_PALETTE[i % len(CHART_PALETTE)] for i in range(size)]


def _lightness(color: str) -> float:
    match = _LIGHTNESS_PATTERN.search(color)
    if not match:
        return 0.5
    return float(match.group(1)) / 100


def contrast_ratio(first: str, second: str) -> float:
    """Approximate contrast ratio from the HSL lightness of two colours."""
    l1 = _lightness(first)
    l2 = _lightness(second)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_contrast_aa(text_color: str, background: str) -> bool:
    """True when the pair reaches the 4.5:1 ratio required for body text."""
    return contrast_ratio(text_color, background) >= 4.5
