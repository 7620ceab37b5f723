# Routes package init
"""
Notes Service — API Routes Package
====================================

Route Inventory:
    - notes.py:   GET    /api/notes           (list all notes)
                  GET    /api/notes/{id}      (single note)
                  POST   /api/notes           (create)
                  PUT    /api/notes/{id}      (update)
                  DELETE /api/notes/{id}      (delete)
    - health.py:  GET    /health              (liveness probe)

Routes stay thin: extract path/body, call the service, return its model.
"""
