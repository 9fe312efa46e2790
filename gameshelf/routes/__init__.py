# Routes package init
"""
GameShelf Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - games.py:   POST   /api/game/create
                  GET    /api/game/get
                  PUT    /api/game/update
                  DELETE /api/game/destroy/{id}
    - health.py:  GET    /health

Routes stay thin: extract the body or path parameter, call GameService,
return the response model. Business rules live in services.
"""
