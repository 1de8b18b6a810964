# Routes package init
"""
Outliner Backend — API Routes Package
=======================================

Route Inventory:
    - tree.py:         GET    /api/data
    - sections.py:     POST   /api/sections
                       PUT    /api/sections/{id}
                       DELETE /api/sections/{id}
    - subsections.py:  POST   /api/subsections
                       PUT    /api/subsections/{id}
                       DELETE /api/subsections/{id}
    - items.py:        POST   /api/items
                       PUT    /api/items/{id}
                       DELETE /api/items/{id}
    - health.py:       GET    /health
    - frontend.py:     GET    /

Routes stay thin: take the body and path parameters, call OutlineService,
return its result. Errors propagate to the handlers in main.py.
"""
