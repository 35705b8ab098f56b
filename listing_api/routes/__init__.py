"""
Listing API — Routes Package
============================

Route Inventory:
    - listings.py: GET    /listings                  (active listings)
                   POST   /listings                  (create, multipart)
                   GET    /listings/{id}             (detail)
                   PUT    /listings/{id}             (update, multipart)
                   PATCH  /listings/{id}             (same as PUT)
                   PATCH  /listings/{id}/field       (status/category/type)
                   DELETE /listings/{id}
    - media.py:    GET    /media/{path}              (local photo files)
    - health.py:   GET    /health

Routes stay thin: decode the request, call a service, pick a status code.
"""
