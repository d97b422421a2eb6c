# tasks/tests/test_services.py
from django.urls import reverse

from tasks.models import Task
from tasks.services import TaskService
from tasks.signals import task_completed
from core.tests.test_base import BaseTestCase


class TaskServiceTest(BaseTestCase):

    def setUp(self):
        self.user = self.create_user()

    def test_catalogue_points(self):
        task = TaskService.complete_task(self.user, 'quiz')

        self.assertTrue(task.completed)
        self.assertIsNotNone(task.completed_at)
        self.assertEqual(task.points, 50)
        self.assertEqual(task.title, 'Quiz')
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 150)

    def test_completion_logged(self):
        with self.assertLogs('tasks.services', level='INFO') as logs:
            TaskService.complete_task(self.user, 'spin')

        self.assertTrue(any('[TASK_COMPLETE]' in line for line in logs.output))

    def test_points_override(self):
        TaskService.complete_task(self.user, 'survey', title='Brand survey', points=300)
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 400)

    def test_unknown_task_type(self):
        with self.assertRaisesMessage(ValueError, 'Unknown task type: lottery'):
            TaskService.complete_task(self.user, 'lottery')
        self.assertFalse(Task.objects.exists())

    def test_signal_reports_first_completion(self):
        received = []

        def listener(sender, task, user, first_completion, **kwargs):
            received.append(first_completion)

        task_completed.connect(listener)
        try:
            TaskService.complete_task(self.user, 'spin')
            TaskService.complete_task(self.user, 'scratch')
        finally:
            task_completed.disconnect(listener)

        self.assertEqual(received, [True, False])


class TaskViewSetTest(BaseTestCase):

    def setUp(self):
        self.user = self.create_user()
        self.client = self.auth_client(self.user)

    def test_complete_and_list(self):
        response = self.client.post(reverse('tasks:task-complete'), {'task_type': 'spin'}, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['points'], 25)

        rows = self.client.get(reverse('tasks:task-list')).json()
        self.assertEqual([row['task_type'] for row in rows], ['spin'])

    def test_invalid_task_type(self):
        response = self.client.post(reverse('tasks:task-complete'), {'task_type': 'lottery'}, format='json')
        self.assert_error(response, 400)
        self.assertTrue(response.json()['error'].startswith('task_type:'))
