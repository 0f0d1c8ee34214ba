"""
Service layer for ordering app.

Services:
- apply_reorder: Persist a batch of (id, sort_order) pairs atomically
- move_task: Execute a task drag-and-drop (same-section reorder or
  cross-section transfer)
"""

import logging

from django.db import transaction

from apps.projects.models import Project, Section
from apps.tasks.models import Task
from .forms import EntityType
from .sort_order import DropKind, plan_drop

logger = logging.getLogger(__name__)

MODEL_FOR_TYPE = {
    EntityType.PROJECTS: Project,
    EntityType.SECTIONS: Section,
    EntityType.TASKS: Task,
}


def apply_reorder(entity_type, keys):
    """
    Write every key's sort_order in one transaction.

    Either all rows are updated or none are: an unknown id raises
    DoesNotExist and any database failure rolls the whole batch back.
    Applying the same batch twice leaves the same state.

    Args:
        entity_type: EntityType value
        keys: List of SortKey (unique ids)

    Returns:
        Number of rows updated
    """
    model = MODEL_FOR_TYPE[entity_type]
    ids = [key.id for key in keys]

    with transaction.atomic():
        rows = {
            str(pk): obj
            for pk, obj in model.objects.select_for_update().in_bulk(ids).items()
        }
        missing = [item_id for item_id in ids if item_id not in rows]
        if missing:
            raise model.DoesNotExist(
                f"{model._meta.verbose_name.capitalize()} not found: {', '.join(missing)}"
            )

        changed = []
        for key in keys:
            obj = rows[key.id]
            obj.sort_order = key.sort_order
            changed.append(obj)

        model.objects.bulk_update(changed, ['sort_order'])

    logger.info('Reordered %s %s', len(changed), entity_type)
    return len(changed)


def move_task(task, over_id):
    """
    Drop a task onto another task or onto a section of the same project.

    - Same section: the section's tasks are renumbered densely and saved
      as one batch
    - Different section: only the task's section changes; its sort_order
      is kept and no sibling is renumbered
    - Anything else (unknown target, dropping a task on itself): nothing

    Returns:
        DropPlan describing what was done
    """
    sections = task.section.project.sections.prefetch_related('tasks')
    board = {str(section.pk): list(section.tasks.all()) for section in sections}

    plan = plan_drop(board, task.pk, over_id)

    if plan.kind == DropKind.REORDER:
        apply_reorder(EntityType.TASKS, plan.updates)
    elif plan.kind == DropKind.TRANSFER:
        with transaction.atomic():
            task.section_id = plan.dest_id
            task.save(update_fields=['section', 'updated_at'])
        logger.info('Task %s moved from section %s to %s', task.pk, plan.source_id, plan.dest_id)

    return plan
