from functools import cache

from apscheduler.schedulers.background import BackgroundScheduler


@cache
def get_threadpool_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.start()
    return scheduler
