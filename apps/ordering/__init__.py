"""
Ordering of projects, sections and tasks.

Modules:
- sort_order: pure sibling-list helpers (append, reorder, cross-parent move, drop planning)
- optimistic: client-side pending/confirmed/reverted state for a drag gesture,
  producing the request bodies the reorder and task endpoints accept
- services / views: persistence and the /api/reorder/ and task move endpoints
"""
