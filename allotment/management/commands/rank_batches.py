"""
Management command to show the advisory batch ranking for a request.

Usage:
    python manage.py rank_batches AR-LZ3K9Q2A-7F2C
    python manage.py rank_batches 6f1c... --limit 5
"""

from django.core.management.base import BaseCommand, CommandError

from allotment import allocation
from allotment.exceptions import NotFoundError


class Command(BaseCommand):
    """Rank candidate batches for an allocation request."""

    help = 'Lists candidate batches for a request, best match first (advisory only)'

    def add_arguments(self, parser):
        parser.add_argument('request', help='Request UUID or code')
        parser.add_argument(
            '--limit',
            type=int,
            default=10,
            help='Show at most this many batches'
        )

    def handle(self, *args, **options):
        try:
            request = allocation.get_request(options['request'])
        except NotFoundError as exc:
            raise CommandError(f"{exc.message}: {options['request']}") from exc

        ranked = allocation.rank(request.pk)[:options['limit']]

        self.stdout.write(
            f'{request.code}: {request.quantity} {request.unit} {request.commodity} '
            f'→ {request.destination} [{request.status}]'
        )
        if not ranked:
            self.stdout.write(self.style.WARNING('No eligible batches'))
            return

        for position, entry in enumerate(ranked, start=1):
            batch = entry.batch
            self.stdout.write(
                f'{position:>2}. {batch.code:<20} score={entry.match_score:>3} '
                f'tier={str(entry.risk_tier):<8} remaining={batch.remaining_quantity} {batch.unit}'
            )
