# bid_pricing/model/__init__.py
