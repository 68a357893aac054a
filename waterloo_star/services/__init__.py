"""
Services package: response shaping, post lifecycle rules and the post query
interface. Import submodules directly (``waterloo_star.services.pagination``)
to keep repositories free of import cycles.
"""
