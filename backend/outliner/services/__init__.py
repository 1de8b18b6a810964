# Services package init
"""
Outliner Backend — Services Layer
===================================

What:  Outline operations sitting between routes (HTTP) and the store.

Service Inventory:
    - OutlineService: read-all, create, update, delete for the three node kinds
    - assemble_tree: reshapes joined rows into the nested outline
"""
