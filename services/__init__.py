"""
services/ - Business Logic Layer
================================
The query engines. Each service validates typed input, delegates SQL to
its repositories and maps rows into plain result records.
No service calls another service.
"""
