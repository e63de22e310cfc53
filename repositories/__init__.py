"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories run their statements through an injected store gateway and
return domain objects or raw row dicts; NULL handling belongs to the services.
"""
