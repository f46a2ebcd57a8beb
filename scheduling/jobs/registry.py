"""Application-wide job queue with every background job registered."""

from scheduling.jobs.cancellation_mail import CancellationMail
from scheduling.jobs.queue import Queue


queue = Queue()
queue.register(CancellationMail())


def get_queue() -> Queue:
    return queue
