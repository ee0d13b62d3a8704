"""
Components layer.

Framework-independent workflows with explicit collaborator contracts
(see `contracts.py`). The web layer supplies concrete collaborators.
"""
