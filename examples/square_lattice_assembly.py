"""Assemble a large square lattice and time the CSR conversion."""

import time

import numpy as np

from hoppingpy.models import SquareLatticeParams, square_lattice_model


params = SquareLatticeParams(nx=1000, ny=1000, tx=-1.0, ty=-0.8, periodic_x=True, periodic_y=True)

t0 = time.perf_counter()
model = square_lattice_model(params)
t1 = time.perf_counter()
csr = model.blocks.to_csr()
t2 = time.perf_counter()

print(f"sites={model.num_sites} nnz={model.blocks.nnz()}")
print(f"assembly={t1 - t0:.3f}s to_csr={t2 - t1:.3f}s")
print(f"entries per family: {dict(zip([f.name for f in model.families], model.blocks.counts()))}")
print(f"row pointer monotonic: {bool(np.all(np.diff(csr.indptr) >= 0))}")
