import sys
import os
import math

# Add parent directories to path to import prismanis modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from prismanis.core.geometry import Point
from prismanis.core.material import EXAGGERATED_GLASS_MATERIAL, WATER_MATERIAL
from prismanis.core.scene import Scene
from prismanis.core.scene_objs import Lens
from prismanis.core.simulator import Simulator
from prismanis.core.svg_renderer import SVGRenderer
from prismanis.analysis import get_segment_statistics, find_overlapping_objects


def prism_demo():
    """Dispersion of sunlight through a prism, followed by a converging lens.

    Problem Statement
    Show white light splitting into its colours in a triangular prism made
    of strongly dispersive glass, then passing a biconvex lens.

    Physics Background
    n(λ) = A + B / λ² with A = 1.5, B = 4000 nm²: n(400) = 1.525, n(700) ≈ 1.508.
    Shorter wavelengths see a higher index and are deviated more.

    Expected Behavior
    The beam fans out after the prism, violet at the largest deviation.
    A faint reflected ray leaves every boundary (Fresnel reflectance)."""

    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)
    print("Setting up a dispersive prism...\n")

    scene = Scene()
    scene.name = 'prism_demo'

    prism = scene.add_curve(
        [Point(300.0, 400.0), Point(400.0, 227.0), Point(500.0, 400.0)],
        EXAGGERATED_GLASS_MATERIAL
    )
    lens = scene.add_lens(Lens(150.0, 150.0, 10.0), Point(650.0, 330.0), 120.0,
                          rotation=math.radians(-20))
    scene.add_curve(
        [Point(780.0, 250.0), Point(780.0, 480.0), Point(860.0, 480.0), Point(860.0, 250.0)],
        WATER_MATERIAL
    )
    scene.add_light('sunlight', Point(100.0, 280.0), Point(1.0, 0.35))

    print(f"  Prism: {prism.id}")
    print(f"  Lens:  {lens.id}")
    print(f"  Overlapping objects: {len(find_overlapping_objects(scene))}")

    simulator = Simulator(scene, verbose=0)
    segments = simulator.run()
    stats = get_segment_statistics(segments)

    print(f"\n  Ray segments: {stats.count}")
    print(f"  Processed rays: {simulator.processed_ray_count}")
    print(f"  Energy range: {stats.min_energy:.5f} .. {stats.max_energy:.5f}")
    for wavelength, count in stats.counts_by_wavelength.items():
        print(f"    {wavelength:5.0f} nm: {count} segments")
    if scene.warning:
        print(f"  WARNING: {scene.warning}")

    renderer = SVGRenderer(width=1000, height=600, viewbox=(0, 0, 1000, 600))
    renderer.draw_scene(scene, segments)
    output_file = output_dir + '/prism_demo.svg'
    renderer.save(output_file)
    print(f"\nSaved to: {output_file}")

    # Moving the prism is undoable
    index = scene.start_transform([prism.id])
    prism.transform.rotate(math.radians(10))
    scene.end_transform(index)
    rotated_segments = Simulator(scene).run()

    renderer_rotated = SVGRenderer(width=1000, height=600, viewbox=(0, 0, 1000, 600))
    renderer_rotated.draw_scene(scene, rotated_segments)
    output_file_rotated = output_dir + '/prism_demo_rotated.svg'
    renderer_rotated.save(output_file_rotated)
    print(f"Saved rotated version to: {output_file_rotated}")

    scene.undo()
    print(f"Undo restored prism rotation: {prism.transform.rotation:.3f} rad")


if __name__ == '__main__':
    prism_demo()
