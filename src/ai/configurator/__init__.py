"""
House configurator chat.

Guides a customer through choosing a MOOD modular house. The model narrows
the catalog and reports its picks through the ``selectHouses`` tool; the
session layer resolves those picks into cards for display.
"""
