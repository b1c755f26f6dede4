# bid_pricing/pricing/__init__.py
