"""Demonstration data for the dashboard and the command-line scripts.

Values are illustrative only; real data comes from the hosted database.
"""

from __future__ import annotations

from datetime import date
from typing import List

from .models import Category, Goal, Investment, Transaction


def sample_investments() -> List[Investment]:
    return [
        Investment(name='Petrobras', ticker='PETR4', investment_type='stocks',
                   institution='XP Investimentos', purchase_price=28.50, current_price=36.80, quantity=100),
        Investment(name='Vale', ticker='VALE3', investment_type='stocks',
                   institution='XP Investimentos', purchase_price=62.30, current_price=58.45, quantity=50),
        Investment(name='Itaú Unibanco', ticker='ITUB4', investment_type='stocks',
                   institution='Clear', purchase_price=24.80, current_price=28.90, quantity=200),
        Investment(name='CDB Nubank 120% CDI', investment_type='bonds',
                   institution='Nubank', purchase_price=10000, current_price=11250, quantity=1),
        Investment(name='Tesouro Selic 2029', investment_type='bonds',
                   institution='Rico', purchase_price=15000, current_price=16800, quantity=1),
        Investment(name='LCI Banco Inter', investment_type='bonds',
                   institution='Inter', purchase_price=8000, current_price=8650, quantity=1),
        Investment(name='Bitcoin (cota)', ticker='BTC', investment_type='crypto',
                   institution='Binance', purchase_price=9000, current_price=26000, quantity=1),
        Investment(name='CSHG Logística', ticker='HGLG11', investment_type='real_estate',
                   institution='XP Investimentos', purchase_price=156.80, current_price=162.50, quantity=30),
        Investment(name='XP Malls', ticker='XPML11', investment_type='real_estate',
                   institution='XP Investimentos', purchase_price=95.20, current_price=98.80, quantity=50),
        Investment(name='Fundo Alaska Black', investment_type='funds',
                   institution='BTG Pactual', purchase_price=12000, current_price=14500, quantity=1),
    ]


def sample_goals() -> List[Goal]:
    return [
        Goal(name='Reserva de Emergência', target_amount=30000, current_amount=18500,
             deadline=date(2027, 6, 1), created_at=date(2025, 1, 1), monthly_contribution=1500),
        Goal(name='Viagem Europa', target_amount=25000, current_amount=8000,
             deadline=date(2027, 12, 1), created_at=date(2025, 3, 15), monthly_contribution=800),
        Goal(name='Troca de Carro', goal_type='patrimony', target_amount=40000, current_amount=12000,
             deadline=date(2028, 6, 1), created_at=date(2025, 6, 1), monthly_contribution=1000),
        Goal(name='Curso de Especialização', target_amount=15000, current_amount=15000,
             created_at=date(2024, 6, 1)),
    ]


HOUSING = Category(id='moradia', name='Moradia', budget_group='essentials', monthly_budget=3000)
GROCERIES = Category(id='alimentacao', name='Alimentação', budget_group='essentials', monthly_budget=1500)
LEISURE = Category(id='lazer', name='Lazer', budget_group='lifestyle', monthly_budget=800)
SUBSCRIPTIONS = Category(id='assinaturas', name='Assinaturas', budget_group='lifestyle')


def sample_transactions(year: int, month: int) -> List[Transaction]:
    """A month of household transactions dated within ``year``/``month``."""
    return [
        Transaction(amount=10000, type='income', date=date(year, month, 5), description='Salário'),
        Transaction(amount=2800, date=date(year, month, 5), description='Aluguel', category=HOUSING),
        Transaction(amount=640, date=date(year, month, 8), description='Supermercado', category=GROCERIES),
        Transaction(amount=420, date=date(year, month, 12), description='Feira', category=GROCERIES),
        Transaction(amount=180, date=date(year, month, 14), description='Cinema', category=LEISURE),
        Transaction(amount=55.90, date=date(year, month, 15), description='Streaming', category=SUBSCRIPTIONS),
        Transaction(amount=500, type='transfer', date=date(year, month, 20), description='Poupança'),
    ]
