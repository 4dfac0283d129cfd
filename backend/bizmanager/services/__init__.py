# Services package init
"""
Business Manager Backend — Services Layer
=========================================

What:  Business logic between routes (HTTP) and the database.
How:   Services take an AsyncSession plus validated schemas, apply the
       ledger rules, and only ever `flush()`; the request's session
       dependency commits or rolls back.

Service Inventory:
    - access:                  Actor / Resource / can_access visibility rules
    - security:                password hashing (passlib)
    - ledger:                  row locks + running-total arithmetic shared by all writers
    - salary_service:          salary entries, oldest-first payment allocator
    - order_service:           orders, assignments, ledger propagation
    - editing_service:         editing projects and editor commission
    - payment_service:         client payments against orders
    - client_service:          clients and work history
    - product_service:         product catalog
    - transportation_service:  logistics records
    - user_service:            staff listings and statistics
    - auth_service:            registration, login, shop directory
    - dashboard_service:       due-today alerts and dashboard stats
"""
