# Routes package init
"""
Mflix API — API Routes Package
===============================

What:  HTTP route handlers that accept requests and return envelopes.

Route Inventory:
    - movies.py:    /api/movies, /api/movies/{movie_id}
    - comments.py:  /api/movies/{movie_id}/comments[/{comment_id}]
    - theaters.py:  /api/theaters, /api/theaters/{theater_id}
    - health.py:    GET /health

Design Principle:
    Routes are THIN. They read path/query/body values, call a service,
    and wrap the result with envelope_response(). Error envelopes are built
    by the exception handlers registered in main.py.
"""
