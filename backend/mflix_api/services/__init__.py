# Services package init
"""
Mflix API — Services Layer
===========================

What:  Data access layer sitting between routes (HTTP) and MongoDB.
How:   Each service validates identifiers, performs one collection operation,
       and turns "nothing matched" into NotFoundError.

Service Inventory:
    - CollectionService (base): shared find/insert/update/delete helpers
    - MovieService:   movies collection
    - TheaterService: theaters collection
    - CommentService: comments collection, scoped by movie
"""
