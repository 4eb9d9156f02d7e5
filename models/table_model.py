from typing import Dict, List, Union

RowData = Dict[str, Union[str, int, float]]


class TableData:
    """
    Representa la tabla cargada en memoria:
      - columns: lista de strings (orden = orden de visualización)
      - rows: lista de diccionarios columna -> valor, en el orden del archivo
    """
    def __init__(self, columns=None, rows=None):
        self.columns: List[str] = columns or []
        self.rows: List[RowData] = rows or []

    @classmethod
    def empty(cls) -> "TableData":
        return cls(columns=[], rows=[])

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __len__(self):
        return len(self.rows)

    def __eq__(self, other):
        if isinstance(other, TableData):
            return self.columns == other.columns and self.rows == other.rows
        if isinstance(other, dict):
            return other == {'columns': self.columns, 'rows': self.rows}
        return NotImplemented

    def __repr__(self):
        return f"TableData(columns={self.columns!r}, rows=<{len(self.rows)} filas>)"
