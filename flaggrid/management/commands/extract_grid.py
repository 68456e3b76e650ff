"""Management command to extract a flag grid from a local screenshot."""
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from flaggrid.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, GridClient
from flaggrid.exceptions import MalformedGridError, TransportError, ValidationError
from flaggrid.grid_format import parse_grid, render, validate


class Command(BaseCommand):
    help = 'Submit a screenshot to the extraction relay and print the grid text'

    def add_arguments(self, parser):
        parser.add_argument('image', help='Path to a PNG, JPEG, GIF or WebP screenshot')
        parser.add_argument('--url', default=DEFAULT_BASE_URL, help='Relay base URL')
        parser.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT)
        parser.add_argument(
            '--validate', action='store_true',
            help='Check the returned text against the grid formatting rules',
        )
        parser.add_argument(
            '--reformat', action='store_true',
            help='Parse the returned text and re-render it with exact alignment',
        )

    def handle(self, *args, **options):
        image_path = Path(options['image'])
        if not image_path.is_file():
            raise CommandError(f'Image not found: {image_path}')

        client = GridClient(options['url'], timeout=options['timeout'])
        try:
            text = client.submit_file(image_path)
        except ValidationError as e:
            raise CommandError(str(e)) from e
        except TransportError as e:
            raise CommandError(f'Failed to extract text: {e}') from e

        if options['reformat']:
            try:
                text = render(parse_grid(text))
            except MalformedGridError as e:
                raise CommandError(f'Could not reformat grid: {e}') from e

        self.stdout.write(text)

        if options['validate']:
            violations = validate(text)
            for violation in violations:
                self.stderr.write(str(violation))
            if violations:
                raise CommandError(f'{len(violations)} formatting violation(s)')
            self.stdout.write(self.style.SUCCESS('Grid text is well formed'))
