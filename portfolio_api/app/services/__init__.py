"""
Service layer abstraction.

Services encapsulate all SQL.  ``CRUDService`` serves every portfolio
resource; ``UserService`` and ``TokenService`` back the authentication
endpoints.
"""
