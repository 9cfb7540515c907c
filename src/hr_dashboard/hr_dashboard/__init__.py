"""HR Dashboard package.

Administrative settings screens built from one schema-driven management
table, with a thin Flask controller layer over service/repository layers
that talk to the HR REST backend.
"""
