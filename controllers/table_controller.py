import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from models.table_model import RowData, TableData
from services.file_service import FailureKind, FileService, FileServiceError

logger = logging.getLogger("table-viewer")

INVALID_FILE_MESSAGE = "Invalid file type. Please upload a CSV or JSON file."

# Todos los fallos del parser se muestran al usuario con el mismo mensaje
ERROR_MESSAGES: Dict[FailureKind, str] = {kind: INVALID_FILE_MESSAGE for kind in FailureKind}


class ControllerState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class TableController:
    """
    Dueño de la tabla cargada y de la ventana de filas visibles.
    - load_file: parsea el primer archivo de la selección y reinicia la ventana.
    - add_more_rows: libera CHUNK_SIZE filas más (hasta el total).
    - check_scroll: libera más filas cuando el scroll llega cerca del final.
    Las llamadas que llegan mientras hay una carga en curso se ignoran.
    """

    CHUNK_SIZE = 100
    SCROLL_THRESHOLD = 100

    def __init__(self, chunk_size: Optional[int] = None, scroll_threshold: Optional[int] = None,
                 strict_csv: bool = False):
        if chunk_size is not None:
            self.CHUNK_SIZE = chunk_size
        if scroll_threshold is not None:
            self.SCROLL_THRESHOLD = scroll_threshold
        self.strict_csv = strict_csv

        self.table_data: TableData = TableData.empty()
        self.current_index: int = 0
        self.loading: bool = False
        self.is_error: bool = False
        self.error_message: str = ""
        self.last_failure: Optional[FailureKind] = None
        self._loaded = False

    # =========================================================================
    #  ESTADO
    # =========================================================================
    @property
    def visible_rows(self) -> List[RowData]:
        return self.table_data.rows[:self.current_index]

    @property
    def has_more_rows(self) -> bool:
        return self.current_index < self.table_data.row_count

    @property
    def fully_revealed(self) -> bool:
        return self._loaded and not self.has_more_rows

    @property
    def state(self) -> ControllerState:
        if self.loading:
            return ControllerState.LOADING
        if self.is_error:
            return ControllerState.ERRORED
        if self._loaded:
            return ControllerState.LOADED
        return ControllerState.IDLE

    # --- CARGA ---
    def load_file(self, files: Sequence) -> bool:
        if not files:
            return False
        if self.loading:
            logger.warning("Carga ignorada: ya hay un archivo cargándose.")
            return False

        self.loading = True
        self._clear_error()
        file = files[0]
        try:
            table = FileService.read_file(file, strict_csv=self.strict_csv)
        except FileServiceError as e:
            self._set_error(e.kind, e)
            return False
        except Exception as e:
            self._set_error(FailureKind.UNREADABLE_FILE, e)
            return False
        else:
            self.set_table(table)
            logger.info("%s cargado: %d filas, mostrando %d",
                        getattr(file, 'name', file), table.row_count, self.current_index)
            return True
        finally:
            self.loading = False

    def set_table(self, table_data: TableData):
        self.table_data = table_data
        self.current_index = min(self.CHUNK_SIZE, table_data.row_count)
        self._loaded = True

    def _clear_error(self):
        self.is_error = False
        self.error_message = ""
        self.last_failure = None

    def _set_error(self, kind: FailureKind, error: Exception):
        logger.warning("No se pudo cargar el archivo (%s): %s", kind.value, error)
        self.table_data = TableData.empty()
        self.current_index = 0
        self._loaded = False
        self.last_failure = kind
        self.error_message = ERROR_MESSAGES[kind]
        self.is_error = True

    # --- VENTANA ---
    def add_more_rows(self) -> int:
        if self.loading:
            logger.debug("add_more_rows ignorado durante la carga.")
            return 0
        total = self.table_data.row_count
        new_index = min(self.current_index + self.CHUNK_SIZE, total)
        added = new_index - self.current_index
        if added > 0:
            self.current_index = new_index
            logger.debug("Ventana ampliada: %d/%d filas", new_index, total)
        return added

    def check_scroll(self, scroll_height: float, client_height: float, scroll_top: float) -> bool:
        if self.loading:
            return False
        remaining = scroll_height - client_height - scroll_top
        if remaining <= self.SCROLL_THRESHOLD:
            return self.add_more_rows() > 0
        return False
