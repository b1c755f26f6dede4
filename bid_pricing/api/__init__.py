# bid_pricing/api/__init__.py
