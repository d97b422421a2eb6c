# tasks/signals.py
from django.dispatch import Signal

# Sent after a task is completed and its points are credited.
# kwargs: task, user, first_completion
task_completed = Signal()
