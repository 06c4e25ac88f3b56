"""
Provider adapters

One subpackage per integration domain. Provider implementations register
themselves with the factory registry; the factory imports this package
tree on first lookup, so no explicit imports are needed here.
"""
