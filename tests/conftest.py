"""
Shared fixtures for the seller report tests.

The `sample_data` dataset is small enough to check by hand:

    seller_1: receipts r1 (50.0) + r3 (4.0) -> revenue 54, profit 10 + 10 + 2 = 22
    seller_2: receipt r2 (54.0)            -> revenue 54, profit 54 - 40 = 14
    seller_3: no receipts                  -> everything 0
"""

import copy
import json

import pytest

from seller_analytics.policies import calculate_bonus_by_profit, calculate_simple_revenue

SAMPLE_DATA = {
    "customers": [
        {"id": "customer_1", "first_name": "Petr", "last_name": "Sidorov"},
        {"id": "customer_2", "first_name": "Maria", "last_name": "Kuznetsova"},
    ],
    "products": [
        {"sku": "SKU_001", "name": "Tea", "category": "Food", "purchase_price": 5, "sale_price": 10},
        {"sku": "SKU_002", "name": "Kettle", "category": "Home", "purchase_price": 20, "sale_price": 30},
        {"sku": "SKU_003", "name": "Sugar", "category": "Food", "purchase_price": 1, "sale_price": 2},
    ],
    "sellers": [
        {"id": "seller_1", "first_name": "Ivan", "last_name": "Petrov"},
        {"id": "seller_2", "first_name": "Anna", "last_name": "Smirnova"},
        {"id": "seller_3", "first_name": "Olga", "last_name": "Ivanova"},
    ],
    "purchase_records": [
        {
            "receipt_id": "r1",
            "seller_id": "seller_1",
            "customer_id": "customer_1",
            "total_amount": 50.0,
            "items": [
                {"sku": "SKU_001", "quantity": 2, "sale_price": 10, "discount": 0},
                {"sku": "SKU_002", "quantity": 1, "sale_price": 30, "discount": 0},
            ],
        },
        {
            "receipt_id": "r2",
            "seller_id": "seller_2",
            "customer_id": "customer_2",
            "total_amount": 54.0,
            "items": [
                {"sku": "SKU_002", "quantity": 2, "sale_price": 30, "discount": 10},
            ],
        },
        {
            "receipt_id": "r3",
            "seller_id": "seller_1",
            "customer_id": "customer_2",
            "total_amount": 4.0,
            "items": [
                {"sku": "SKU_003", "quantity": 2, "sale_price": 2, "discount": 0},
            ],
        },
    ],
}


@pytest.fixture
def sample_data():
    """A fresh deep copy so tests can mutate it freely."""
    return copy.deepcopy(SAMPLE_DATA)


@pytest.fixture
def default_options():
    return {
        "calculate_revenue": calculate_simple_revenue,
        "calculate_bonus": calculate_bonus_by_profit,
    }


@pytest.fixture
def dataset_file(tmp_path, sample_data):
    """The sample dataset written to disk under a dated filename."""
    path = tmp_path / "sales_dataset_2025-01-31.json"
    path.write_text(json.dumps(sample_data), encoding="utf-8")
    return path
