# Routes package init
"""
Business Manager Backend — API Routes Package
=============================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:            /api/auth            register, login, shops, staff lookup
    - users.py:           /api/users           staff lists, statistics, performance
    - clients.py:         /api/clients         CRUD + work history
    - orders.py:          /api/orders          CRUD with ledger propagation
    - editing.py:         /api/editing         editing projects + commission
    - salary.py:          /api/salary          entries, my-salary, allocation pay
    - payments.py:        /api/payments        client payments against orders
    - products.py:        /api/products        product catalog
    - transportation.py:  /api/transportation  logistics records
    - dashboard.py:       /api/dashboard       alerts + stats
    - health.py:          /health              service health check

Design Principle:
    Routes stay THIN: parse the request, resolve the caller (`get_actor`),
    call one service method, shape the response. Ledger rules live in
    services; the session dependency owns the transaction.
"""
