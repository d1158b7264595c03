"""
Errores de la conciliacion de estados
"""


class ReconciliationError(Exception):
    """Error base de una importacion de estados"""

    code = "RECONCILIATION_ERROR"


class EmptyTableError(ReconciliationError):
    """La planilla no tiene fila de encabezados"""

    code = "EMPTY_TABLE"

    def __init__(self):
        super().__init__("La planilla esta vacia")


class MissingColumnError(ReconciliationError):
    """Faltan columnas obligatorias y no se indico su posicion

    El lote se aborta sin procesar filas, por eso ``accepted_count`` es 0.
    """

    code = "MISSING_REQUIRED_COLUMN"
    accepted_count = 0

    def __init__(self, labels):
        self.labels = list(labels)
        super().__init__(
            "No se encontraron las columnas obligatorias: " + ", ".join(self.labels)
        )


class UnsupportedFileError(ReconciliationError):
    """El archivo subido no se puede leer como planilla"""

    code = "UNSUPPORTED_FILE"
