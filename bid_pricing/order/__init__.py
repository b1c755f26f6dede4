# bid_pricing/order/__init__.py
