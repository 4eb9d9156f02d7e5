import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Union

from models.table_model import RowData, TableData

logger = logging.getLogger("table-viewer")


class FailureKind(Enum):
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    MALFORMED_JSON = "malformed_json"
    INVALID_JSON_SCHEMA = "invalid_json_schema"
    MALFORMED_CSV = "malformed_csv"
    UNREADABLE_FILE = "unreadable_file"


class FileServiceError(Exception):
    kind = FailureKind.UNREADABLE_FILE


class UnsupportedFileType(FileServiceError):
    kind = FailureKind.UNSUPPORTED_FILE_TYPE

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension}")


class MalformedJson(FileServiceError):
    kind = FailureKind.MALFORMED_JSON


class InvalidJsonSchema(FileServiceError):
    kind = FailureKind.INVALID_JSON_SCHEMA


class MalformedCsv(FileServiceError):
    kind = FailureKind.MALFORMED_CSV


class UnreadableFile(FileServiceError):
    kind = FailureKind.UNREADABLE_FILE


class UploadedFile:
    """
    Archivo recibido desde la selección del usuario: nombre (con extensión)
    y contenido como str o bytes.
    """

    ENCODINGS = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']

    def __init__(self, name: str, content: Union[str, bytes]):
        self.name = name
        self._content = content

    @classmethod
    def from_path(cls, path: str) -> "UploadedFile":
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise UnreadableFile(f"Error de lectura: {e}")
        return cls(name=Path(path).name, content=content)

    def text(self) -> str:
        if isinstance(self._content, str):
            return self._content
        # Probar codificaciones en orden; latin-1 acepta cualquier byte
        for enc in self.ENCODINGS:
            try:
                return self._content.decode(enc)
            except UnicodeDecodeError:
                continue
        raise UnreadableFile(f"No se pudo decodificar {self.name}")

    def __repr__(self):
        return f"UploadedFile({self.name!r})"


class FileService:
    """
    Convierte un archivo CSV o JSON en un TableData.
    - El formato se decide por la extensión (sin distinguir mayúsculas).
    - JSON: se espera {columns, rows} y se devuelve tal cual tras validarlo.
    - CSV: primera línea = encabezado, separación simple por comas, sin comillas.
    Cualquier fallo se reporta con una subclase de FileServiceError.
    """

    @staticmethod
    def get_extension(filename: str) -> str:
        return Path(filename).name.rsplit(".", 1)[-1]

    @staticmethod
    def read_file(file, strict_csv: bool = False) -> TableData:
        extension = FileService.get_extension(file.name)
        kind = extension.lower()
        if kind not in ("json", "csv"):
            raise UnsupportedFileType(extension)

        try:
            text = file.text()
        except FileServiceError:
            raise
        except Exception as e:
            raise UnreadableFile(f"Error inesperado al leer {file.name}: {e}")

        if kind == "json":
            table = FileService.parse_json(text)
        else:
            table = FileService.parse_csv(text, strict=strict_csv)

        logger.debug("%s leído como %s: %d columnas, %d filas",
                     file.name, kind, len(table.columns), table.row_count)
        return table

    @staticmethod
    def parse_json(text: str) -> TableData:
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise MalformedJson(f"JSON inválido: {e}")

        if not isinstance(data, dict):
            raise InvalidJsonSchema("El JSON debe ser un objeto con 'columns' y 'rows'.")

        columns = data.get('columns')
        rows = data.get('rows')
        if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
            raise InvalidJsonSchema("'columns' debe ser una lista de strings.")
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise InvalidJsonSchema("'rows' debe ser una lista de objetos.")

        return TableData(columns=columns, rows=rows)

    @staticmethod
    def parse_csv(text: str, strict: bool = False) -> TableData:
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]

        header_line = lines[0]
        if not header_line:
            raise MalformedCsv("CSV sin encabezados.")
        columns = header_line.split(",")
        expected_cols = len(columns)

        if strict and len(set(columns)) != expected_cols:
            raise MalformedCsv("El encabezado tiene columnas repetidas.")

        rows: List[RowData] = []
        for line_no, line in enumerate(lines[1:], start=2):
            if not line:
                continue
            values = line.split(",")
            if strict and len(values) != expected_cols:
                raise MalformedCsv(
                    f"Línea {line_no}: {len(values)} valores, se esperaban {expected_cols}."
                )
            # zip corta al más corto: sobrantes se descartan, faltantes quedan ausentes
            rows.append(dict(zip(columns, values)))

        return TableData(columns=columns, rows=rows)

