# Overview: Demo payloads served when a webhook is unavailable.
#
# Each builder returns a fresh dict shaped exactly like the corresponding
# successful webhook reply, so routes never special-case the fallback.

from __future__ import annotations

from typing import Any

from ..time_utils import utc_timestamp


DEMO_PRODUCTS = (
    {
        "id": "espresso-single",
        "name": "Single Espresso",
        "description": "Rich, bold shot",
        "price": 65,
        "category": "Coffee - Espresso",
        "image": "☕",
        "stock": 50,
        "lowStockThreshold": 10,
        "isActive": True,
        "cost": 18.50,
    },
    {
        "id": "americano",
        "name": "Americano",
        "description": "Espresso with hot water",
        "price": 85,
        "category": "Coffee - Espresso",
        "image": "☕",
        "stock": 45,
        "lowStockThreshold": 10,
        "isActive": True,
        "cost": 22.00,
    },
    {
        "id": "latte",
        "name": "Latte",
        "description": "Espresso with steamed milk",
        "price": 120,
        "category": "Coffee - Milk Based",
        "image": "🥛",
        "stock": 30,
        "lowStockThreshold": 10,
        "isActive": True,
        "cost": 35.50,
    },
)


def settings_payload(shop_name: str, currency: str, tax_rate: float) -> dict[str, Any]:
    return {
        "success": True,
        "settings": {
            "shopName": shop_name,
            "shopTagline": "Fresh Coffee Daily",
            "logoEmoji": "☕",
            "currency": currency,
            "taxRate": tax_rate,
            "lowStockThreshold": 10,
            "enableIngredientTracking": True,
            "address": "123 Coffee Street, Manila",
            "phone": "+63 917 123 4567",
            "email": "info@coffeeparadise.ph",
        },
    }


def products_payload() -> dict[str, Any]:
    products = [dict(product) for product in DEMO_PRODUCTS]
    return {
        "success": True,
        "products": products,
        "lastUpdate": utc_timestamp(),
        "totalProducts": len(products),
        "activeProducts": sum(1 for p in products if p["isActive"]),
    }


def order_payload(order_id: str, total: Any) -> dict[str, Any]:
    return {
        "success": True,
        "orderId": order_id,
        "total": total,
        "message": "Order processed successfully (demo mode)",
        "lowStockAlert": False,
        "lowStockCount": 0,
        "emailSent": False,
    }


def inventory_update_payload() -> dict[str, Any]:
    return {
        "success": True,
        "message": "Inventory updated successfully (demo mode)",
    }


def dashboard_stats_payload() -> dict[str, Any]:
    return {
        "success": True,
        "stats": {
            "todaySales": 15750,
            "todayOrders": 42,
            "avgOrder": 375,
            "profitMargin": 68,
        },
        "chartData": {
            "sales": {
                "labels": ["9AM", "10AM", "11AM", "12PM", "1PM", "2PM", "3PM"],
                "data": [1200, 1800, 2400, 3200, 2800, 2200, 2100],
            },
            "products": {
                "labels": ["Latte", "Americano", "Cappuccino", "Espresso", "Mocha"],
                "data": [15, 12, 10, 8, 7],
            },
        },
        "alerts": [],
    }


def low_stock_payload() -> dict[str, Any]:
    return {
        "success": True,
        "lowStockItems": [],
        "summary": {"total": 0, "critical": 0, "warning": 0},
    }


def analytics_payload(period: str) -> dict[str, Any]:
    return {
        "success": True,
        "analytics": {
            "totalRevenue": 35000,
            "totalOrders": 95,
            "avgOrderValue": 368,
            "topProducts": [
                {"name": "Latte", "quantity": 25},
                {"name": "Americano", "quantity": 20},
                {"name": "Cappuccino", "quantity": 18},
            ],
        },
        "period": period,
    }
