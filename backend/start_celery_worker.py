#!/usr/bin/env python3
"""Start a Celery worker with an embedded beat scheduler for retention purges."""

import sys
import warnings

from celery.bin import worker

# Suppress the superuser privilege warning
warnings.filterwarnings('ignore', category=UserWarning, message='.*superuser privileges.*')
warnings.filterwarnings('ignore', category=RuntimeWarning, message='.*superuser privileges.*')

from webhook_monitor.workers.celery_app import PURGE_QUEUE, celery_app

if __name__ == '__main__':
    worker_app = worker.worker(app=celery_app)

    sys.argv = [
        'celery',
        '-A', 'webhook_monitor.workers.celery_app.celery_app',
        'worker',
        '--beat',
        '--loglevel=info',
        f'--queues={PURGE_QUEUE}',
        '--pool=solo',
        '--without-mingle',
        '--without-gossip',
    ] + sys.argv[1:]

    worker_app.run()
