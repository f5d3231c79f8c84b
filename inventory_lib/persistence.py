"""
Persistence Module - Saves vehicle snapshots to a CSV file and loads them back

File layout: one vehicle per record, no header, fields in the order
id,year,make,model,price,is_automatic, records ending in CRLF. Text containing a
comma, a quote, a carriage return or a newline is quoted and embedded quotes
are doubled. is_automatic is written as 'true', 'false' or left empty when
unknown.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional
import csv
import io
import logging
import os
import stat
import tempfile

from .errors import ParseError, StorageError, ValidationError
from .vehicle_manager import Vehicle

FIELD_ORDER = ('id', 'year', 'make', 'model', 'price', 'is_automatic')

BOOLEAN_TEXT = {'true': True, 'false': False, '': None}


def format_is_automatic(value: Optional[bool]) -> str:
    if value is None:
        return ''
    return 'true' if value else 'false'


def parse_is_automatic(text: str) -> Optional[bool]:
    try:
        return BOOLEAN_TEXT[text.strip().lower()]
    except KeyError:
        raise ValueError(f"is_automatic must be true, false or empty, got {text!r}")


class VehicleFileStore:
    """Round-trips a full vehicle snapshot to and from a single file"""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def render(self, vehicles: Iterable[Vehicle]) -> str:
        """Render vehicles as the file document"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\r\n')
        for v in vehicles:
            writer.writerow([
                v.id,
                v.year,
                v.make,
                v.model,
                str(v.price),
                format_is_automatic(v.is_automatic),
            ])
        return buffer.getvalue()

    def save(self, vehicles: Iterable[Vehicle], destination) -> None:
        """Overwrite destination with the snapshot, all or nothing"""
        vehicles = list(vehicles)
        document = self.render(vehicles)
        destination = os.fspath(destination)
        directory = os.path.dirname(os.path.abspath(destination))

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.vehicles-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding=self.encoding, newline='') as handle:
                handle.write(document)
            if os.path.exists(destination):
                # keep the permissions of the file being replaced
                os.chmod(tmp_path, stat.S_IMODE(os.stat(destination).st_mode))
            os.replace(tmp_path, destination)
        except OSError as e:
            logging.error(f"Vehicle save error: {e}")
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(destination, e.strerror or str(e)) from e

        logging.info(f"Saved {len(vehicles)} vehicle(s) to {destination}")

    def load(self, source) -> List[Vehicle]:
        """Read vehicles in file order; a bad record aborts the whole load"""
        source = os.fspath(source)
        try:
            with open(source, 'r', encoding=self.encoding, newline='') as handle:
                document = handle.read()
        except OSError as e:
            logging.error(f"Vehicle load error: {e}")
            raise StorageError(source, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            logging.error(f"Vehicle load error: {e}")
            raise StorageError(source, f'not a {self.encoding} text file') from e

        vehicles = self.parse(document)
        logging.info(f"Loaded {len(vehicles)} vehicle(s) from {source}")
        return vehicles

    def parse(self, document: str) -> List[Vehicle]:
        vehicles = []
        seen_ids = set()
        reader = csv.reader(io.StringIO(document, newline=''), strict=True)
        try:
            for row in reader:
                # blank line
                if not row:
                    continue
                vehicle = self._decode_row(row, reader.line_num)
                if vehicle.id in seen_ids:
                    raise ParseError(reader.line_num, f'duplicate id {vehicle.id}')
                seen_ids.add(vehicle.id)
                vehicles.append(vehicle)
        except csv.Error as e:
            raise ParseError(reader.line_num, f'malformed record ({e})') from e
        return vehicles

    def _decode_row(self, row: List[str], line_number: int) -> Vehicle:
        if len(row) != len(FIELD_ORDER):
            raise ParseError(
                line_number,
                f'expected {len(FIELD_ORDER)} fields ({",".join(FIELD_ORDER)}), got {len(row)}'
            )
        raw_id, raw_year, make, model, raw_price, raw_automatic = row
        try:
            vehicle_id = int(raw_id)
            year = int(raw_year)
            price = Decimal(raw_price)
            is_automatic = parse_is_automatic(raw_automatic)
        except (ValueError, InvalidOperation) as e:
            raise ParseError(line_number, f'bad value: {e}') from e

        try:
            return Vehicle(vehicle_id, year, make, model, price, is_automatic)
        except ValidationError as e:
            raise ParseError(line_number, f'invalid vehicle: {e}') from e
