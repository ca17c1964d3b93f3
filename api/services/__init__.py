"""Service layer for business logic.

Services encapsulate all business logic, keeping routes thin and focused
on HTTP handling. This separation provides:
- Clear business rules in one place (duplicates, bounds, rate limits)
- Normalization of input before it reaches storage
- Reusable business logic across multiple endpoints

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain all business rules and validation
- Raise core.errors exceptions for every rejected request
- Return Pydantic response schemas (never ORM models)

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
- Commit (the DbSession dependency owns the transaction)
"""
