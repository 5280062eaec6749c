import uuid

from django.core.management.base import BaseCommand, CommandError

from apps.invoicing.application.tasks import validate_invoices, validate_pending_invoices


class Command(BaseCommand):
    help = 'Validate invoices against timesheet-derived expected spend'

    def add_arguments(self, parser):
        parser.add_argument(
            '--ids',
            nargs='+',
            type=str,
            help='Ids of the invoices to validate'
        )
        parser.add_argument(
            '--pending',
            action='store_true',
            help='Validate every pending invoice'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        invoice_ids = options['ids']
        pending = options['pending']
        sync_mode = options['sync']

        if bool(invoice_ids) == pending:
            raise CommandError('Pass either --ids or --pending')

        if invoice_ids:
            try:
                invoice_ids = [str(uuid.UUID(invoice_id)) for invoice_id in invoice_ids]
            except ValueError:
                raise CommandError('Invoice ids must be UUIDs')

        task = validate_pending_invoices if pending else validate_invoices
        args = () if pending else (invoice_ids,)

        if sync_mode:
            self.stdout.write('Running in synchronous mode...')
            result = task(*args)

            self.stdout.write(
                self.style.SUCCESS(
                    f"Validated {result['validated']} invoice(s): "
                    f"{result['within_tolerance']} within tolerance, "
                    f"{result['exceeding_tolerance']} exceeding"
                )
            )
            if result['skipped']:
                self.stdout.write(
                    self.style.WARNING(
                        f"Skipped {result['skipped']} unknown invoice(s)"
                    )
                )
        else:
            self.stdout.write('Dispatching Celery task...')
            async_result = task.delay(*args)

            self.stdout.write(
                self.style.SUCCESS(
                    f'Task dispatched with ID: {async_result.id}'
                )
            )
            self.stdout.write(
                'Use "celery -A core inspect active" to check task status'
            )
