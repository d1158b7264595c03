"""
Lectura de planillas subidas (CSV / Excel) a una tabla de textos
"""
from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pandas as pd

from .errors import UnsupportedFileError

CSV_EXTENSIONS = {".csv", ".txt"}
EXCEL_EXTENSIONS = {".xlsx", ".xlsm"}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS


def _csv_separator(text: str) -> str:
    # Las exportaciones regionales usan ";" como separador
    header = text.splitlines()[0] if text else ""
    return ";" if header.count(";") > header.count(",") else ","


def _read_frame(uploaded_file, extension: str) -> pd.DataFrame:
    if extension in CSV_EXTENSIONS:
        content = uploaded_file.read()
        text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
        sep = _csv_separator(text)
        # Las filas pueden traer mas celdas que el encabezado
        width = max((len(line.split(sep)) for line in text.splitlines() if line.strip()), default=0)
        if width == 0:
            raise UnsupportedFileError("El archivo esta vacio")
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            sep=sep,
        )
    return pd.read_excel(
        uploaded_file,
        header=None,
        dtype=str,
        keep_default_na=False,
        engine="openpyxl",
    )


def parse_uploaded_table(uploaded_file) -> list[list[str]]:
    """
    Convierte un archivo subido en filas de textos

    La fila 0 es la de encabezados. Las celdas vacias se devuelven como "".
    Las columnas finales vacias en todas las filas se descartan.

    Args:
        uploaded_file: Archivo subido (UploadedFile de Django o similar con ``name``)

    Returns:
        list: Filas de la planilla

    Raises:
        UnsupportedFileError: Si la extension no es soportada o el archivo no se puede leer
    """
    name = getattr(uploaded_file, "name", "") or ""
    extension = Path(name).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileError(
            f"Formato de archivo no soportado: '{extension or name}'. "
            f"Formatos validos: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    if hasattr(uploaded_file, "seek"):
        uploaded_file.seek(0)

    try:
        frame = _read_frame(uploaded_file, extension)
    except pd.errors.EmptyDataError as exc:
        raise UnsupportedFileError("El archivo esta vacio") from exc
    except (ValueError, UnicodeDecodeError, zipfile.BadZipFile, pd.errors.ParserError) as exc:
        raise UnsupportedFileError(f"No se pudo leer el archivo: {exc}") from exc

    frame = frame.fillna("")
    while frame.shape[1] > 1 and (frame.iloc[:, -1] == "").all():
        frame = frame.iloc[:, :-1]
    return [
        [str(value) for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]
