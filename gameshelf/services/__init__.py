# Services package init
"""
GameShelf Backend — Services Layer
====================================

What:  Business rules between routes (HTTP) and repositories (persistence).

Service Inventory:
    - GameService: validation and orchestration for the four game operations
"""
