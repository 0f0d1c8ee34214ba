"""
Tests for tasks, comments and attachments: services and /api/tasks/.
"""

from datetime import date, datetime, timezone as dt_timezone
from unittest import mock

from django.test import override_settings
from django.urls import reverse

from apps.tasks.models import Task, Comment, Attachment
from apps.tasks.services import update_task
from .base import ApiTestCase


# =============================================================================
# Task CRUD
# =============================================================================

class TaskApiTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.project, self.todo, self.doing, self.done = self.make_project()

    def test_create_requires_section(self):
        response = self.post_json(reverse('tasks:task_collection'), {'title': 'Dishes'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('sectionId', self.body(response)['details'])

    def test_create_requires_title(self):
        response = self.post_json(reverse('tasks:task_collection'), {'sectionId': str(self.todo.pk)})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.body(response)['error'], 'Task title is required')

    def test_create_appends_to_section(self):
        self.make_task(self.todo, 'Existing', sort_order=7)
        response = self.post_json(reverse('tasks:task_collection'), {
            'title': 'Dishes',
            'sectionId': str(self.todo.pk),
            'dueDate': '2026-03-14',
        })
        self.assertEqual(response.status_code, 201)

        data = self.body(response)
        self.assertEqual(data['sortOrder'], 8)
        self.assertEqual(data['status'], 'not_started')
        self.assertEqual(data['dueDate'], '2026-03-14')
        self.assertIsNone(data['completedAt'])

    def test_create_rejects_bad_due_date(self):
        for value in ['03/14/2026', '2026-02-30', '2026-03-14T10:00:00Z']:
            with self.subTest(value=value):
                response = self.post_json(reverse('tasks:task_collection'), {
                    'title': 'Dishes',
                    'sectionId': str(self.todo.pk),
                    'dueDate': value,
                })
                self.assertEqual(response.status_code, 400)
                self.assertIn('due_date', self.body(response)['details'])
        self.assertFalse(Task.objects.exists())

    def test_detail(self):
        task = self.make_task(self.todo, 'Dishes')
        Comment.objects.create(task=task, body='soon')

        data = self.body(self.client.get(reverse('tasks:task_detail', args=[task.pk])))
        self.assertEqual(data['section'], {'id': str(self.todo.pk), 'name': 'To Do'})
        self.assertEqual(data['project']['name'], 'Home')
        self.assertEqual(
            [s['name'] for s in data['project']['sections']],
            ['To Do', 'In Progress', 'Done'],
        )
        self.assertEqual([c['body'] for c in data['comments']], ['soon'])
        self.assertEqual(data['attachments'], [])

    def test_completing_stamps_completed_at(self):
        task = self.make_task(self.todo, 'Dishes')
        url = reverse('tasks:task_detail', args=[task.pk])

        data = self.body(self.patch_json(url, {'status': 'completed'}))
        self.assertEqual(data['status'], 'completed')
        self.assertIsNotNone(data['completedAt'])

        data = self.body(self.patch_json(url, {'status': 'in_progress'}))
        self.assertIsNone(data['completedAt'])

    def test_explicit_completed_at(self):
        task = self.make_task(self.todo, 'Dishes')
        response = self.patch_json(reverse('tasks:task_detail', args=[task.pk]), {
            'status': 'completed',
            'completedAt': '2026-03-14T15:00:00+00:00',
        })
        task.refresh_from_db()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(task.completed_at, datetime(2026, 3, 14, 15, 0, tzinfo=dt_timezone.utc))

    def test_completed_at_rejected_for_open_task(self):
        task = self.make_task(self.todo, 'Dishes')
        response = self.patch_json(reverse('tasks:task_detail', args=[task.pk]), {
            'completedAt': '2026-03-14T15:00:00+00:00',
        })
        self.assertEqual(response.status_code, 400)

    def test_out_of_range_sort_order(self):
        task = self.make_task(self.todo, 'Dishes', sort_order=3)
        url = reverse('tasks:task_detail', args=[task.pk])
        for sort_order in [10 ** 30, 2 ** 31, -(2 ** 31) - 1]:
            with self.subTest(sort_order=sort_order):
                response = self.patch_json(url, {'sortOrder': sort_order})
                self.assertEqual(response.status_code, 400)
                self.assertIn('sort_order', self.body(response)['details'])
        task.refresh_from_db()
        self.assertEqual(task.sort_order, 3)

    def test_create_with_out_of_range_sort_order(self):
        response = self.post_json(reverse('tasks:task_collection'), {
            'title': 'Dishes',
            'sectionId': str(self.todo.pk),
            'sortOrder': 10 ** 30,
        })
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Task.objects.exists())

    def test_invalid_status(self):
        task = self.make_task(self.todo, 'Dishes')
        response = self.patch_json(reverse('tasks:task_detail', args=[task.pk]), {'status': 'done'})
        self.assertEqual(response.status_code, 400)

    def test_clear_due_date(self):
        task = self.make_task(self.todo, 'Dishes', due_date='2026-03-14')
        data = self.body(self.patch_json(reverse('tasks:task_detail', args=[task.pk]), {'dueDate': None}))
        self.assertIsNone(data['dueDate'])

    def test_patch_only_touches_sent_fields(self):
        task = self.make_task(self.todo, 'Dishes', description='All of them', due_date='2026-03-14')
        self.patch_json(reverse('tasks:task_detail', args=[task.pk]), {'title': 'Plates'})
        task.refresh_from_db()
        self.assertEqual(task.title, 'Plates')
        self.assertEqual(task.description, 'All of them')
        self.assertEqual(task.due_date, date(2026, 3, 14))

    def test_move_to_section_keeps_sort_order(self):
        task = self.make_task(self.todo, 'Dishes', sort_order=3)
        data = self.body(self.patch_json(
            reverse('tasks:task_detail', args=[task.pk]), {'sectionId': str(self.done.pk)},
        ))
        self.assertEqual(data['sectionId'], str(self.done.pk))
        self.assertEqual(data['sortOrder'], 3)

    def test_delete(self):
        task = self.make_task(self.todo, 'Dishes')
        response = self.client.delete(reverse('tasks:task_detail', args=[task.pk]))
        self.assertEqual(self.body(response), {'success': True})
        self.assertFalse(Task.objects.exists())

    def test_update_task_service_status_round_trip(self):
        task = self.make_task(self.todo, 'Dishes')
        update_task(task, status=Task.Status.COMPLETED)
        self.assertTrue(task.is_completed)
        update_task(task, status=Task.Status.ON_HOLD)
        self.assertIsNone(task.completed_at)


# =============================================================================
# Task list filters
# =============================================================================

class TaskListTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.project, self.todo, self.doing, self.done = self.make_project('Home')
        _, self.other_todo, *_ = self.make_project('Work')

        self.overdue = self.make_task(self.todo, 'Overdue', due_date='2026-03-10')
        self.today = self.make_task(self.doing, 'Today', due_date='2026-03-14')
        self.later = self.make_task(self.other_todo, 'Later report', due_date='2026-04-01')
        self.undated = self.make_task(self.done, 'Undated', status=Task.Status.COMPLETED)

    def list_titles(self, **params):
        response = self.client.get(reverse('tasks:task_collection'), params)
        self.assertEqual(response.status_code, 200)
        return sorted(task['title'] for task in self.body(response))

    def test_all(self):
        self.assertEqual(len(self.list_titles()), 4)

    def test_status(self):
        self.assertEqual(self.list_titles(status='completed'), ['Undated'])

    def test_project_and_section(self):
        self.assertEqual(self.list_titles(project=str(self.project.pk)), ['Overdue', 'Today', 'Undated'])
        self.assertEqual(self.list_titles(section=str(self.doing.pk)), ['Today'])

    def test_due_range(self):
        self.assertEqual(self.list_titles(dueFrom='2026-03-11', dueTo='2026-03-31'), ['Today'])

    def test_search(self):
        self.assertEqual(self.list_titles(search='REPORT'), ['Later report'])

    def test_due_bucket(self):
        with mock.patch('apps.tasks.filters.today', return_value=date(2026, 3, 14)):
            self.assertEqual(self.list_titles(due='overdue'), ['Overdue'])
            self.assertEqual(self.list_titles(due='due-today'), ['Today'])
            self.assertEqual(self.list_titles(due='upcoming'), ['Later report'])
            self.assertEqual(self.list_titles(due='no-date'), ['Undated'])

    def test_due_range_requires_iso_dates(self):
        for params in [{'dueFrom': '03/14/2026'}, {'dueTo': '14.03.2026'}]:
            with self.subTest(params=params):
                response = self.client.get(reverse('tasks:task_collection'), params)
                self.assertEqual(response.status_code, 400)

    def test_invalid_filter_value(self):
        response = self.client.get(reverse('tasks:task_collection'), {'status': 'bogus'})
        self.assertEqual(response.status_code, 400)

    def test_list_items_carry_project(self):
        response = self.client.get(reverse('tasks:task_collection'), {'section': str(self.other_todo.pk)})
        task = self.body(response)[0]
        self.assertEqual(task['projectName'], 'Work')
        self.assertEqual(task['sectionName'], 'To Do')


# =============================================================================
# Comments and attachments
# =============================================================================

class CommentAndAttachmentTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        _, todo, *_ = self.make_project()
        self.task = self.make_task(todo, 'Dishes')

    def attachment_payload(self, **overrides):
        payload = {
            'fileName': 'receipt.pdf',
            'fileUrl': 'https://storage.example.com/receipt.pdf',
            'fileSize': 2048,
            'mimeType': 'application/pdf',
        }
        payload.update(overrides)
        return payload

    def test_add_comment(self):
        response = self.post_json(reverse('tasks:comment_create', args=[self.task.pk]), {'body': ' Done soon '})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.body(response)['body'], 'Done soon')

    def test_comment_requires_body(self):
        response = self.post_json(reverse('tasks:comment_create', args=[self.task.pk]), {'body': ''})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.body(response)['error'], 'Comment body is required')

    def test_comments_are_chronological(self):
        for body in ['first', 'second', 'third']:
            self.post_json(reverse('tasks:comment_create', args=[self.task.pk]), {'body': body})
        data = self.body(self.client.get(reverse('tasks:task_detail', args=[self.task.pk])))
        self.assertEqual([c['body'] for c in data['comments']], ['first', 'second', 'third'])

    def test_add_attachment(self):
        response = self.post_json(
            reverse('tasks:attachment_create', args=[self.task.pk]), self.attachment_payload(),
        )
        self.assertEqual(response.status_code, 201)
        data = self.body(response)
        self.assertEqual(data['fileName'], 'receipt.pdf')
        self.assertEqual(data['fileSize'], 2048)

    def test_attachment_requires_all_fields(self):
        payload = self.attachment_payload()
        del payload['mimeType']
        response = self.post_json(reverse('tasks:attachment_create', args=[self.task.pk]), payload)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Attachment.objects.exists())

    @override_settings(MAX_ATTACHMENT_SIZE=1024 * 1024)
    def test_attachment_size_limit(self):
        response = self.post_json(
            reverse('tasks:attachment_create', args=[self.task.pk]),
            self.attachment_payload(fileSize=1024 * 1024 + 1),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.body(response)['error'], 'File size cannot exceed 1 MB.')

    def test_delete_attachment(self):
        attachment = Attachment.objects.create(
            task=self.task, file_name='a.txt', file_url='https://storage.example.com/a.txt',
            file_size=10, mime_type='text/plain',
        )
        response = self.client.delete(reverse('tasks:attachment_delete', args=[attachment.pk]))
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Attachment.objects.exists())

    def test_file_size_display(self):
        attachment = Attachment(file_size=1536)
        self.assertEqual(attachment.file_size_display, '1.5 KB')
