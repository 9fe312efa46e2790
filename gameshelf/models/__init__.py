# Models package init
"""
GameShelf Backend — ORM Models
================================

What:  SQLAlchemy models registered on gameshelf.database.Base.
Model Inventory:
    - game.py: Game (the only entity)
"""
