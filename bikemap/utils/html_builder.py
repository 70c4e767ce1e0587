"""
HTML Builder Utilities
======================
Shared utilities for generating HTML pages with Leaflet maps.
"""

from typing import Tuple

from ..config import DEFAULT_MAP_CENTER, DEFAULT_ZOOM, MIN_ZOOM, MAX_ZOOM


def get_base_styles() -> str:
    """
    Return the CSS for the traffic map page.

    Includes:
    - Full-page map with a header bar
    - Time slider layout
    - Legend swatches
    """
    return '''
        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: 'Inter', system-ui, -apple-system, sans-serif;
            background: #f8fafc;
            color: #0f172a;
            display: flex;
            flex-direction: column;
            height: 100vh;
        }

        /* Header */
        .header {
            padding: 12px 24px;
            display: flex;
            align-items: baseline;
            justify-content: space-between;
            gap: 24px;
            flex-wrap: wrap;
            border-bottom: 1px solid #e2e8f0;
        }

        .header h1 {
            font-size: 1.4rem;
            font-weight: 700;
        }

        /* Time slider */
        .time-filter {
            display: flex;
            align-items: baseline;
            gap: 12px;
        }

        .time-filter input[type=range] {
            width: 280px;
        }

        .time-filter time,
        .time-filter em {
            display: block;
            min-width: 90px;
        }

        .time-filter em {
            color: #64748b;
            font-style: italic;
        }

        .hidden { display: none !important; }

        /* Map container */
        #map {
            flex: 1;
            width: 100%;
            position: relative;
        }

        #map svg.station-overlay {
            position: absolute;
            z-index: 450;
            width: 100%;
            height: 100%;
            top: 0;
            left: 0;
            pointer-events: none;
        }

        #map svg.station-overlay circle {
            pointer-events: auto;
            --color-departures: steelblue;
            --color-arrivals: darkorange;
            --color: color-mix(
                in oklch,
                var(--color-departures) calc(100% * var(--departure-ratio)),
                var(--color-arrivals)
            );
            fill: var(--color);
        }

        /* Legend */
        .legend {
            display: flex;
            gap: 16px;
            padding: 8px 24px;
            font-size: 0.85rem;
        }

        .legend .swatch {
            display: inline-block;
            width: 12px;
            height: 12px;
            border-radius: 50%;
            margin-right: 6px;
            vertical-align: middle;
        }
    '''


def get_leaflet_head(title: str, extra_styles: str = "") -> str:
    """
    Generate the HTML <head> section with Leaflet dependencies.

    Args:
        title: Page title
        extra_styles: Additional CSS to include

    Returns:
        HTML string for the <head> section
    """
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/leaflet@1.9.3/dist/leaflet.css"/>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap" rel="stylesheet">
    <style>
        {get_base_styles()}
        {extra_styles}
    </style>
</head>'''


def get_leaflet_scripts(
    center: Tuple[float, float] = DEFAULT_MAP_CENTER,
    zoom: int = DEFAULT_ZOOM,
    extra_scripts: str = ""
) -> str:
    """
    Generate the Leaflet initialization scripts.

    Args:
        center: Map center coordinates (lat, lon)
        zoom: Initial zoom level
        extra_scripts: Additional JavaScript to include

    Returns:
        HTML string with script tags
    """
    return f'''
    <script src="https://cdn.jsdelivr.net/npm/leaflet@1.9.3/dist/leaflet.js"></script>
    <script>
        // Initialize map
        const map = L.map('map', {{ minZoom: {MIN_ZOOM}, maxZoom: {MAX_ZOOM} }})
            .setView([{center[0]}, {center[1]}], {zoom});

        // Street tile layer
        L.tileLayer('https://{{s}}.basemaps.cartocdn.com/rastertiles/voyager/{{z}}/{{x}}/{{y}}{{r}}.png', {{
            attribution: '&copy; OpenStreetMap, &copy; CARTO',
            subdomains: 'abcd',
            maxZoom: {MAX_ZOOM}
        }}).addTo(map);

        {extra_scripts}
    </script>'''


def build_leaflet_page(
    title: str,
    body_content: str,
    scripts: str,
    extra_styles: str = "",
    center: Tuple[float, float] = DEFAULT_MAP_CENTER,
    zoom: int = DEFAULT_ZOOM
) -> str:
    """
    Generate a complete HTML page with Leaflet map.

    Args:
        title: Page title
        body_content: HTML content for the body
        scripts: Custom JavaScript (added after Leaflet init)
        extra_styles: Additional CSS styles
        center: Map center coordinates
        zoom: Initial zoom level

    Returns:
        Complete HTML page as string
    """
    head = get_leaflet_head(title, extra_styles)
    leaflet_scripts = get_leaflet_scripts(center, zoom, scripts)

    return f'''{head}
<body>
    {body_content}
    {leaflet_scripts}
</body>
</html>'''


def format_time_of_day(minutes: int) -> str:
    """Format minutes since midnight as a 12-hour clock time, e.g. '10:00 AM'."""
    hours, mins = divmod(int(minutes), 60)
    suffix = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{mins:02d} {suffix}"
