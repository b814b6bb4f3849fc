from django.conf import settings
from django.core.management.base import BaseCommand

from notifications.services.dispatcher import retry_pending


class Command(BaseCommand):
    help = "Re-deliver order notifications that are still pending or failed"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="Maximum number of notifications to process in this run",
        )

    def handle(self, *args, **options):
        self.stdout.write(
            self.style.WARNING(
                f"Retrying notifications (max attempts {settings.NOTIFICATIONS_MAX_ATTEMPTS})..."
            )
        )

        summary = retry_pending(limit=options["limit"])

        style = self.style.SUCCESS if not summary["failed"] else self.style.ERROR
        self.stdout.write(style(f"✅ sent={summary['sent']} failed={summary['failed']}"))
