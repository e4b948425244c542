"""Edición del campo de expresión en la posición del cursor.

Funciones puras sobre (texto, inicio, fin de la selección); la interfaz
aplica el texto y el cursor devueltos al widget.
"""


def insert_text(value: str, start: int, end: int, text: str) -> tuple[str, int]:
    """Inserta `text` en el cursor (o sobre la selección).

    Devuelve el nuevo texto y la posición del cursor, al final de lo insertado.
    """
    start, end = _clamp(value, start, end)
    return value[:start] + text + value[end:], start + len(text)


def delete_char(value: str, start: int, end: int) -> tuple[str, int]:
    """Borra la selección o, si no la hay, el carácter anterior al cursor."""
    start, end = _clamp(value, start, end)
    if start != end:
        return value[:start] + value[end:], start
    if start > 0:
        return value[:start - 1] + value[end:], start - 1
    return value, start


def _clamp(value: str, start: int, end: int) -> tuple[int, int]:
    start = max(0, min(start or 0, len(value)))
    end = max(0, min(end or 0, len(value)))
    return min(start, end), max(start, end)
