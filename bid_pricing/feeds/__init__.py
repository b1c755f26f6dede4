# bid_pricing/feeds/__init__.py
