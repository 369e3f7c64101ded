"""
utils package
-------------

Shared helpers for the crew scheduler: constants, logging, datetime
normalisation, seed data loaders and the ERP crews client.
"""
