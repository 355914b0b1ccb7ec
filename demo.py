"""
Quick demo: drop balls on the board.
Run: venv/bin/python demo.py
Click or touch to drop a ball. Press Q or close window to exit.
"""
from plinko.engine import PlinkoEngine, drop_trajectory
from plinko.renderer import Renderer, AppearanceConfig
from plinko.config import get_variant
import plinko as P

VARIANT = 'floaty'

# One headless drop first, using the same constants as the window
variant = get_variant(VARIANT)
traj = drop_trajectory(layout=variant.layout, physics=variant.physics, seed=P.SEED)
print(f"Variant: {VARIANT}")
print(f"Test drop landed in bin {traj['bin']} ({traj['label']}) after {traj['steps']} ticks")

engine = PlinkoEngine.from_variant(VARIANT, seed=P.SEED)
renderer = Renderer(engine, AppearanceConfig())
renderer.play()
