import boto3

from app.config.settings import Settings
from app.database.connection import Database
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.storage.object_store import S3ObjectStore
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


def main() -> None:
    """Entry point: open pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    if not settings.queue_url:
        raise SystemExit("QUEUE_URL must be set")
    db = Database.from_settings(settings)

    try:
        session = boto3.Session(region_name=settings.aws_region)
        processor = build_processor(settings, db)
        object_store = S3ObjectStore(session.client("s3"))
        job_runner = JobRunner(processor, object_store, settings)
        worker = Worker(session.client("sqs"), job_runner, settings)
        worker.run()
    finally:
        db.close()


if __name__ == "__main__":
    main()
