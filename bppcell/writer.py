import os
from os import PathLike
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Mapping, Sequence

from lxml import etree

from bppcell.constants import (
    ALTITUDE_FORMAT,
    DEFAULT_STYLE,
    DOCUMENT_ID,
    KML_EXTENSION,
    KML_NAMESPACE,
    KML_STANDARD,
    LONLAT_FORMAT,
)
from bppcell.tracks import FlightPath


class OutputAccessError(OSError):
    pass


def format_number(value: float, integer_digits: int, decimal_places: int) -> str:
    """
    format a number with zero-padded integer digits and a fixed number of decimal places

    >>> format_number(-76.1, 2, 6)
    '-76.100000'
    >>> format_number(150, 5, 1)
    '00150.0'
    """

    width = integer_digits + 1 + decimal_places
    formatted = f'{abs(value):0{width}.{decimal_places}f}'
    if value < 0 and float(formatted) != 0:
        formatted = f'-{formatted}'
    return formatted


def format_coordinates(coordinates: Sequence[float]) -> str:
    """ KML coordinate tuple `longitude,latitude,altitude` from (x, y, z) """

    longitude, latitude, altitude = coordinates
    return ','.join(
        (
            format_number(longitude, *LONLAT_FORMAT),
            format_number(latitude, *LONLAT_FORMAT),
            format_number(altitude, *ALTITUDE_FORMAT),
        )
    )


def _subelement(parent: etree._Element, tag: str, text: str = None, **attributes) -> etree._Element:
    element = etree.SubElement(parent, f'{KML_STANDARD}{tag}', **attributes)
    if text is not None:
        element.text = text
    return element


def _style_element(parent: etree._Element, style: Mapping):
    style_element = _subelement(parent, 'Style', id=style['id'])

    line_style = _subelement(style_element, 'LineStyle')
    _subelement(line_style, 'color', style['line_color'])
    _subelement(line_style, 'width', f'{style["line_width"]:g}')

    polygon_style = _subelement(style_element, 'PolyStyle')
    _subelement(polygon_style, 'color', style['polygon_color'])


def _placemark_element(
    parent: etree._Element, flight_path: FlightPath, style_id: str, extrude: bool = True
):
    placemark = _subelement(parent, 'Placemark')
    _subelement(placemark, 'styleUrl', f'#{style_id}')
    _subelement(placemark, 'name', flight_path.name)

    geometries = _subelement(placemark, 'MultiGeometry')

    path = _subelement(geometries, 'LineString')
    _subelement(path, 'tessellate', '1')
    _subelement(path, 'extrude', '1' if extrude else '0')
    _subelement(path, 'altitudeMode', 'absolute')
    _subelement(
        path,
        'coordinates',
        ' '.join(format_coordinates(record.coordinates) for record in flight_path),
    )

    landing_site = _subelement(geometries, 'Point')
    _subelement(landing_site, 'altitudeMode', 'absolute')
    _subelement(landing_site, 'coordinates', format_coordinates(flight_path.landing_site))


def flight_path_kml(flight_path: FlightPath, style: Mapping = None) -> etree._Element:
    """
    build a KML document with the flight path as an extruded line and the landing site as a point

    :param flight_path: flight path
    :param style: line and extrusion colors, line width, and style ID (see `DEFAULT_STYLE`)
    :return: root `kml` element
    """

    style = {**DEFAULT_STYLE, **(style if style is not None else {})}

    root = etree.Element(f'{KML_STANDARD}kml', nsmap={None: KML_NAMESPACE})
    document = _subelement(root, 'Document', id=DOCUMENT_ID)
    _style_element(document, style)
    _placemark_element(document, flight_path, style['id'])
    return root


def kml_string(flight_path: FlightPath, style: Mapping = None) -> bytes:
    return etree.tostring(
        flight_path_kml(flight_path, style),
        pretty_print=True,
        xml_declaration=True,
        encoding='UTF-8',
    )


def write_flight_path(flight_path: FlightPath, filename: PathLike, style: Mapping = None) -> Path:
    """
    write flight path to a KML file, replacing the file only once the document is complete

    :param flight_path: flight path
    :param filename: path to output KML file
    :param style: KML style overrides
    :return: path of written file
    """

    if not isinstance(filename, Path):
        filename = Path(filename)
    if filename.suffix.lower() != KML_EXTENSION:
        raise NotImplementedError(
            f'saving to file type "{filename.suffix}" has not been implemented'
        )

    content = kml_string(flight_path, style)

    temporary_filename = None
    try:
        with NamedTemporaryFile(
            'wb', dir=filename.parent, prefix=f'.{filename.stem}_', suffix='.tmp', delete=False
        ) as output_file:
            temporary_filename = output_file.name
            output_file.write(content)
        os.chmod(temporary_filename, 0o644)
        os.replace(temporary_filename, filename)
    except OSError as error:
        if temporary_filename is not None and os.path.exists(temporary_filename):
            os.remove(temporary_filename)
        raise OutputAccessError(f'could not write "{filename}" - {error}')

    return filename

