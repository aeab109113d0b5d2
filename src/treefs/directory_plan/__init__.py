"""Planning of the directory structure implied by an entry model.

This package provides an anytree-based representation of the tree an entry model
describes, used to derive directory creation order and to render the planned tree.
"""
