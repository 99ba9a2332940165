"""
Copyright 2026 prismanis authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math

import svgwrite

from .color_physics import wavelength_to_css, energy_to_opacity
from .constants import LIGHT_ANCHOR_SIZE
from .scene_objs import lens_outline


class SVGRenderer:
    """
    SVG export of a traced scene.

    Scene objects go on an objects layer and ray segments on a rays layer
    above it. Each segment is stroked with the colour of its wavelength and
    an opacity equal to its energy.

    Coordinate System:
        Scene coordinates are used as is: positive Y points down, matching
        the orientation the scene is edited in.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height)
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_objects (svgwrite.Group): Group for object elements
        layer_rays (svgwrite.Group): Group for ray elements
    """

    def __init__(self, width=800, height=600, viewbox=None, background='black'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): SVG viewBox as (min_x, min_y, width, height)
                                    If None, uses (0, 0, width, height)
            background (str or None): Background fill, None for transparent
        """
        self.width = width
        self.height = height
        self.viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # debug=False disables svgwrite's strict attribute validation, which
        # rejects rgba() colours and the Inkscape namespace.
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        if background is not None:
            self.dwg.add(self.dwg.rect(
                insert=(self.viewbox[0], self.viewbox[1]),
                size=(self.viewbox[2], self.viewbox[3]),
                fill=background
            ))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Objects'}
        ))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Rays'}
        ))

    def draw_polygon(self, points, fill, stroke, obj_id=None):
        element = self.dwg.polygon(
            points=[p.to_tuple() for p in points],
            fill=fill,
            stroke=stroke,
            stroke_width=1
        )
        if obj_id is not None:
            element['id'] = f'obj-{obj_id}'
        self.layer_objects.add(element)
        return element

    def draw_light(self, light):
        """Draw a light anchor as a small square with a tick along its facing direction."""
        pos = light.position
        direction = light.direction
        half = LIGHT_ANCHOR_SIZE / 2
        group = self.dwg.g(id=f'obj-{light.id}')
        group.add(self.dwg.rect(
            insert=(pos.x - half, pos.y - half),
            size=(LIGHT_ANCHOR_SIZE, LIGHT_ANCHOR_SIZE),
            fill='orange',
            transform=f'rotate({math.degrees(light.transform.rotation)}, {pos.x}, {pos.y})'
        ))
        group.add(self.dwg.line(
            start=(pos.x, pos.y),
            end=(pos.x + direction.x * LIGHT_ANCHOR_SIZE, pos.y + direction.y * LIGHT_ANCHOR_SIZE),
            stroke='orange',
            stroke_width=1
        ))
        self.layer_objects.add(group)
        return group

    def draw_ray_segment(self, segment, stroke_width=1.0):
        """
        Draw one RaySegment as a polyline.

        Args:
            segment (RaySegment): The segment to draw
            stroke_width (float): Stroke width in user units
        """
        element = self.dwg.polyline(
            points=[p.to_tuple() for p in segment.points],
            fill='none',
            stroke=wavelength_to_css(segment.wavelength),
            stroke_width=stroke_width,
            stroke_opacity=energy_to_opacity(segment.energy)
        )
        element['data-wavelength'] = f'{segment.wavelength:g}'
        element['data-energy'] = f'{segment.energy:.6g}'
        self.layer_rays.add(element)
        return element

    def draw_scene(self, scene, segments=None, draw_objects: bool = True,
                   lens_samples: int = 32, stroke_width: float = 1.0) -> bool:
        """
        Draw all objects of a scene and the given segments.

        Args:
            scene: The Scene to draw
            segments: RaySegment list to draw on top (optional)
            draw_objects (bool): Whether to draw scene objects (default: True)
            lens_samples (int): Points per lens arc in the outline
            stroke_width (float): Stroke width of the ray segments

        Returns:
            bool: True on success.
        """
        if draw_objects:
            for obj in scene.objs:
                if obj.type == 'curve':
                    self.draw_polygon(obj.world_points(), obj.material.fill_color,
                                      obj.material.stroke_color, obj.id)
                elif obj.type == 'lens':
                    self.draw_polygon(lens_outline(obj, lens_samples), obj.material.fill_color,
                                      obj.material.stroke_color, obj.id)
                elif obj.type == 'light':
                    self.draw_light(obj)

        for seg in segments or []:
            self.draw_ray_segment(seg, stroke_width)

        return True

    def save(self, filename: str = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (e.g., 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
