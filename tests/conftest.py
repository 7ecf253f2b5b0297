"""
Pytest configuration and shared fixtures.
"""
import os
import sys

import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from stockcheck.config import reset_settings  # noqa: E402

WAYBILL_HEADER = ["№", "Артикул", "Товар", "Кол-во", "Ед.", "Штрихкод"]


def _preamble(count):
    lines = [
        ["Накладная на внутреннее перемещение", "", ""],
        ["Отправитель: склад 1", "", ""],
        ["Основание: заявка 45", "", ""],
        ["", "", ""],
        ["Страница 1", "", ""],
    ]
    return [list(lines[i % len(lines)]) for i in range(count)]


@pytest.fixture
def waybill_matrix():
    """30 preamble rows, header, 5 products, then totals/signature/counterparty."""
    data = [
        ["1", "VALMO001", "Widget", "12", "шт", "9988776655"],
        ["2", "VALMO002", "Гайка М8", "100", "шт", "4600000000012"],
        ["3", "VALMO003", "Болт М8х40", "50", "шт", "4600000000029"],
        ["4", "VALMO004", "Шайба плоская", "2,5", "кг", "4600000000036"],
        ["5", "VALMO005", "Саморез", "1 200", "шт", "4600000000043"],
    ]
    footer = [
        ["Итого", "", "", "1364,5", "", ""],
        ["Подпись", "__________", "", "", "", ""],
        ["ООО «Ромашка», ИНН 7701234567", "", "", "", "", ""],
    ]
    return _preamble(30) + [list(WAYBILL_HEADER)] + data + footer


@pytest.fixture
def single_item_matrix():
    return [
        ["Артикул", "Товар", "Кол-во", "Ед.", "Штрихкод", "Ячейка"],
        ["VALMO001", "Widget", "12", "шт", "9988776655", "A1-1-1, B2-2-2"],
    ]


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()
