"""
gedcom_merge: keeps a master GEDCOM file for a family-tree site.

Merges standalone GEDCOM exports into the master, appends people entered at
the terminal, and converts the site's person JSON into a renderer tree.
"""

__version__ = "0.1.0"
