"""
slidekit - Editable slide decks of interactive elements

A deck is a tree of slides and tagged element nodes. The package provides:
- Path-addressed, copy-on-write reads and writes over that tree
- A store owning one deck per editing session, with score aggregates
- A renderer registry and a recursive interpreter for tagged nodes
"""

__version__ = "0.1.0"
