"""hostprep: host bootstrap for the Replicated-managed application stack.

Core design goals:
- Linear, fail-fast pipeline
- Idempotent host changes
- Multi-strategy discovery where tooling differs between distros
- Centralized logging
"""

__all__ = []
