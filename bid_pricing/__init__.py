# bid_pricing/__init__.py
"""Расчёт цены бида для заявок на вычислительные ресурсы (Akash)."""

__version__ = "0.1.0"
