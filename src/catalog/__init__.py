"""
House catalog for the MOOD configurator.

Static house and tiny-module records, the bedroom classifier used to narrow
them, and the helpers that turn records into displayable cards.
"""
