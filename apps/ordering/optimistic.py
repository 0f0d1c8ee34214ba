"""
Optimistic reorder operations.

A drag end is applied to local state immediately and then persisted with
one request. Each operation is an explicit state machine:

    pending -> confirmed            (the write succeeded)
    pending -> reverted             (the write failed; state was refetched)

There is no local rollback: a failed write is recovered by refetching the
authoritative state, which replaces the optimistic state wholesale.

Usage:
    op = OptimisticReorder('tasks', section_tasks, from_index=0, to_index=2)
    render(op.current)
    try:
        client.patch('/api/reorder/', op.payload)
    except RequestFailed:
        op.revert(fetch_section_tasks)
    else:
        op.confirm()
"""

import logging

from .sort_order import reorder, dense_keys, move_across

logger = logging.getLogger(__name__)


class ReorderState:
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    REVERTED = 'reverted'


class InvalidTransition(Exception):
    """Raised when confirming or reverting an operation that already settled."""


class _OptimisticOperation:
    """Shared pending/confirmed/reverted bookkeeping."""

    def __init__(self):
        self.state = ReorderState.PENDING
        self.current = None

    @property
    def is_settled(self):
        return self.state != ReorderState.PENDING

    def _require_pending(self, action):
        if self.state != ReorderState.PENDING:
            raise InvalidTransition(f'Cannot {action} an operation that is already {self.state}.')

    def confirm(self):
        """Mark the persisted write as successful."""
        self._require_pending('confirm')
        self.state = ReorderState.CONFIRMED
        return self.current

    def revert(self, refetch):
        """
        Discard the optimistic state after a failed write.

        Args:
            refetch: Callable returning the authoritative state

        Returns:
            The refetched state, which becomes current
        """
        self._require_pending('revert')
        logger.info('Reverting optimistic %s; refetching state', type(self).__name__)
        self.current = refetch()
        self.state = ReorderState.REVERTED
        return self.current


class OptimisticReorder(_OptimisticOperation):
    """
    Same-parent move of one sibling.

    current holds the densely renumbered list; payload is the body for
    PATCH /api/reorder/. Moving an item onto its own position settles
    immediately as confirmed with no payload.
    """

    def __init__(self, entity_type, siblings, from_index, to_index):
        super().__init__()
        self.entity_type = entity_type
        self.previous = list(siblings)
        self.current = reorder(self.previous, from_index, to_index)
        self.is_noop = [item.id for item in self.current] == [item.id for item in self.previous]

        if self.is_noop:
            self.state = ReorderState.CONFIRMED

    @property
    def payload(self):
        if self.is_noop:
            return None
        return {
            'type': self.entity_type,
            'items': [key.as_payload() for key in dense_keys(self.current)],
        }


class OptimisticTransfer(_OptimisticOperation):
    """
    Cross-parent move of one task.

    current is a (source list, dest list) pair. Only the task's parent is
    persisted, so payload is the PATCH body for /api/tasks/<id>/.
    """

    def __init__(self, source, dest, item_id, dest_id, over_id=None):
        super().__init__()
        self.item_id = item_id
        self.dest_id = dest_id
        self.previous = (list(source), list(dest))
        self.current = move_across(source, dest, item_id, over_id)

    @property
    def payload(self):
        return {'sectionId': str(self.dest_id)}
