"""External API clients for movie metadata.

Submodules:
    omdb -- OMDb title lookup client and response classifier
"""
