"""Domain layer for gstprep application.

Services are imported from their own modules; the database layer imports
entities from here, so this package keeps no eager imports.
"""
