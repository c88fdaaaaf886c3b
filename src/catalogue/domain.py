"""Catalogue bounded context: product reference data.

Products are created by catalog management and are read-only to the
ordering pipeline, which reaches them through the ``Catalog`` port.
"""

from protean.domain import Domain

catalogue = Domain(name="catalogue")
