"""
Chord Page Generator.

Writes a self-contained HTML page that draws the directed chord diagram
with D3. All data work (filtering, the weight matrix, colors, opacities,
tooltip text) happens in Python; the page only runs the D3 chord layout
and wires up the hover and view-switch handlers.

Both network views are embedded, so flipping the switch redraws from the
already-resolved data without another fetch.
"""

import json
import logging
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import (
    ERROR_COLOR,
    HOVER_OPACITY,
    LABEL_FONT_SIZE,
    LABEL_OFFSET,
    MESSAGE_FONT_SIZE,
    MESSAGE_HEIGHT,
    MESSAGE_WIDTH,
    ChartSettings,
)
from ..core.types import NetworkType
from .chord import ChordView

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Hashi Propagation Chord</title>
    <script src="https://d3js.org/d3.v7.min.js"></script>
    <style>
        body {
            margin: 0;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #ffffff;
            color: #171717;
        }

        .toolbar {
            display: flex;
            justify-content: flex-end;
            align-items: center;
            gap: 8px;
            padding: 12px 16px;
            font-size: 14px;
        }

        /* Mainnet / Testnet switch */
        .switch {
            position: relative;
            display: inline-block;
            width: 44px;
            height: 24px;
        }

        .switch input { opacity: 0; width: 0; height: 0; }

        .slider {
            position: absolute;
            inset: 0;
            cursor: pointer;
            background: #d4d4d8;
            border-radius: 24px;
            transition: background 0.2s;
        }

        .slider::before {
            content: "";
            position: absolute;
            width: 18px;
            height: 18px;
            left: 3px;
            bottom: 3px;
            background: #ffffff;
            border-radius: 50%;
            transition: transform 0.2s;
        }

        .switch input:checked + .slider { background: #3b82f6; }
        .switch input:checked + .slider::before { transform: translateX(20px); }

        #chart {
            display: flex;
            justify-content: center;
        }

        #chart svg {
            max-width: 100%;
            height: auto;
        }

        #tooltip {
            position: absolute;
            opacity: 0;
            pointer-events: none;
            background: rgba(23, 23, 23, 0.9);
            color: #fafafa;
            padding: 6px 10px;
            border-radius: 4px;
            font-size: 13px;
            max-width: 320px;
        }
    </style>
</head>
<body>
    <div class="toolbar">
        <span>Mainnet</span>
        <label class="switch">
            <input type="checkbox" id="viewSwitch">
            <span class="slider"></span>
        </label>
        <span>Testnet</span>
    </div>
    <div id="chart"></div>
    <div id="tooltip"></div>

    <script>
    const PAYLOAD = __CHART_DATA__;
    const GEOMETRY = PAYLOAD.geometry;

    const chart = d3.select("#chart");
    const tooltip = d3.select("#tooltip");
    const viewSwitch = document.getElementById("viewSwitch");

    function displayMessage(text, color) {
        chart.append("svg")
            .attr("width", GEOMETRY.messageWidth)
            .attr("height", GEOMETRY.messageHeight)
            .append("text")
            .attr("x", GEOMETRY.messageWidth / 2)
            .attr("y", GEOMETRY.messageHeight / 2)
            .attr("text-anchor", "middle")
            .attr("font-size", GEOMETRY.messageFontSize)
            .attr("fill", color)
            .text(text);
    }

    // Hover handlers only read the ribbon bound to the element.
    function placeTooltip(event) {
        tooltip.style("left", (event.pageX + 10) + "px")
            .style("top", (event.pageY - 10) + "px");
    }

    function onRibbonEnter(event, d) {
        tooltip.style("opacity", 1).html(d.ribbon ? d.ribbon.tooltip : "");
        placeTooltip(event);
        d3.select(event.currentTarget).attr("fill-opacity", GEOMETRY.hoverOpacity);
    }

    function onRibbonMove(event) {
        placeTooltip(event);
    }

    function onRibbonLeave(event, d) {
        tooltip.style("opacity", 0);
        d3.select(event.currentTarget).attr("fill-opacity", d.ribbon ? d.ribbon.opacity : 0);
    }

    function labelTransform(d) {
        const angle = (d.startAngle + d.endAngle) / 2;
        const rotate = angle * 180 / Math.PI - 90;
        const flip = angle > Math.PI ? "rotate(180)" : "";
        return `rotate(${rotate}) translate(${GEOMETRY.outerRadius + GEOMETRY.labelOffset}) ${flip}`;
    }

    function labelAnchor(d) {
        return (d.startAngle + d.endAngle) / 2 > Math.PI ? "end" : "start";
    }

    function renderChart(type) {
        chart.selectAll("svg").remove();

        const view = PAYLOAD.views[type];
        if (view.empty !== null) {
            displayMessage(view.empty, null);
            return;
        }

        const width = GEOMETRY.width;
        const height = width;
        const padding = GEOMETRY.padding;
        const innerRadius = GEOMETRY.innerRadius;

        const chordGenerator = d3.chordDirected()
            .padAngle(12 / innerRadius)
            .sortSubgroups(d3.descending)
            .sortChords(d3.descending);

        const arc = d3.arc()
            .innerRadius(innerRadius)
            .outerRadius(GEOMETRY.outerRadius);

        const ribbon = d3.ribbonArrow()
            .radius(innerRadius - 0.5)
            .padAngle(0.01)
            .headRadius(innerRadius * 0.1);

        const svg = chart.append("svg")
            .attr("viewBox", [
                -width / 2 - padding,
                -height / 2 - padding,
                width + padding * 2,
                height + padding * 2
            ].join(" "))
            .attr("preserveAspectRatio", "xMidYMid meet");

        const chords = chordGenerator(view.matrix);
        const ribbons = chords.map(c => ({
            chord: c,
            ribbon: view.ribbons[`${c.source.index},${c.target.index}`] || null
        }));

        svg.append("g")
            .selectAll("path")
            .data(ribbons)
            .join("path")
            .attr("d", d => ribbon(d.chord))
            .attr("fill-opacity", d => d.ribbon ? d.ribbon.opacity : 0)
            .attr("fill", d => d.ribbon ? d.ribbon.color : view.groups[d.chord.source.index].color)
            .style("mix-blend-mode", "multiply")
            .on("mouseover", onRibbonEnter)
            .on("mousemove", onRibbonMove)
            .on("mouseout", onRibbonLeave);

        const group = svg.append("g")
            .selectAll("g")
            .data(chords.groups)
            .join("g");

        group.append("path")
            .attr("d", arc)
            .attr("fill", d => view.groups[d.index].color)
            .attr("stroke", "#fff");

        group.append("text")
            .attr("dy", -3)
            .attr("transform", labelTransform)
            .attr("text-anchor", labelAnchor)
            .attr("font-size", GEOMETRY.labelFontSize)
            .text(d => view.names[d.index]);
    }

    if (PAYLOAD.error !== null) {
        displayMessage(PAYLOAD.error, GEOMETRY.errorColor);
    } else {
        viewSwitch.checked = PAYLOAD.current === "testnet";
        renderChart(PAYLOAD.current);
        viewSwitch.addEventListener("change", () => {
            renderChart(viewSwitch.checked ? "testnet" : "mainnet");
        });
    }
    </script>
</body>
</html>
"""


def geometry(settings: ChartSettings) -> Dict[str, Any]:
    """Chart dimensions and styling constants consumed by the page script."""
    return {
        "width": settings.width,
        "padding": settings.padding,
        "innerRadius": settings.inner_radius,
        "outerRadius": settings.outer_radius,
        "labelOffset": LABEL_OFFSET,
        "labelFontSize": LABEL_FONT_SIZE,
        "hoverOpacity": HOVER_OPACITY,
        "messageWidth": MESSAGE_WIDTH,
        "messageHeight": MESSAGE_HEIGHT,
        "messageFontSize": MESSAGE_FONT_SIZE,
        "errorColor": ERROR_COLOR,
    }


def build_payload(
    views: Dict[str, ChordView],
    current: NetworkType = NetworkType.MAINNET,
    settings: Optional[ChartSettings] = None,
    error: Optional[str] = None,
) -> Dict[str, Any]:
    settings = settings or ChartSettings()
    return {
        "current": str(current),
        "error": error,
        "geometry": geometry(settings),
        "views": {name: view.model_dump(mode="json") for name, view in views.items()},
    }


def _embed(payload: Dict[str, Any]) -> str:
    # "</" would end the <script> block early
    json_data = json.dumps(payload).replace("</", "<\\/")
    return HTML_TEMPLATE.replace("__CHART_DATA__", json_data)


def generate_html(
    views: Dict[str, ChordView],
    current: NetworkType = NetworkType.MAINNET,
    settings: Optional[ChartSettings] = None,
) -> str:
    """
    Generate the HTML content for the chord diagram.

    Args:
        views: One ChordView per network type (see ``ChordApp.all_views``).
        current: The view drawn on load.
        settings: Chart geometry; defaults apply when omitted.
    """
    return _embed(build_payload(views, current, settings))


def generate_error_html(message: str, settings: Optional[ChartSettings] = None) -> str:
    """A page that shows ``message`` in red where the chart would be."""
    return _embed(build_payload({}, settings=settings, error=message))


def write_page(html_content: str, output_path: str) -> Path:
    out_file = Path(output_path)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(html_content, encoding="utf-8")
    logger.debug(f"Wrote {len(html_content)} bytes to {out_file}")
    return out_file


def open_visualization(html_content: str, output_path: str = "chord.html") -> str:
    """
    Write the page and open it in the browser.
    """
    out_file = write_page(html_content, output_path)
    webbrowser.open(out_file.resolve().as_uri())
    return str(out_file)
