"""
Todo API - Routes Package
===========================

Route Inventory:
    - root.py:    GET    /
    - todos.py:   POST   /todos            GET /todos
                  GET    /todos/{id}       PATCH /todos/{id}    DELETE /todos/{id}
    - labels.py:  POST   /labels           GET /labels          DELETE /labels/{id}

Routes are thin: read the validated payload and/or path id, make exactly one
repository call, return the result with the right status code. Repository
and gate errors are turned into responses by the handlers in main.py.
"""
