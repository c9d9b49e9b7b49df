# pointfitting

Local surface analysis for point clouds, built on NumPy.

The package fits an algebraic sphere to the neighbourhood of an evaluation
point, weighting every sample by its distance to that point. It also provides
weighted sums of positions and normals, and a small container for principal
curvatures.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `pointfitting.weighting`
  - `WeightKernel`: the protocol a 1D kernel follows. It has `f(x)`, `df(x)`
    and `ddf(x)`, the value and its first and second derivatives on `[0, 1]`.
  - `DistWeightFunc(kernel, t=1.0)`: weights a query by `kernel.f(|q - p| / t)`,
    where `p` is the basis centre set by `init`. Queries farther than `t` get a
    zero weight. `w` returns the weight together with the query in local
    coordinates. The derivatives of the weight are given by `spacedw`,
    `spaced2w`, `scaledw`, `scaled2w` and `scale_spaced2w`. `eval_scale`,
    `eval_pos`, `basis_center` and `convert_to_local_basis` give access to the
    frame.
- `pointfitting.algebraic_sphere`
  - `FitResult`: `STABLE`, `UNSTABLE`, `UNDEFINED` or `CONFLICT_ERROR_FOUND`.
  - `AlgebraicSphere(weight_func)`: the zero isosurface of
    `uc + x·ul + uq |x|²`, stored relative to the weight function's basis
    centre. It offers `init`, `is_ready`, `is_stable`, `is_valid`, equality
    within a small tolerance, `change_basis`, `pratt_norm`, `pratt_norm2`,
    `apply_pratt_norm`, `is_normalized`, `radius`, `center`,
    `potential(q=None)`, `primitive_gradient` and `is_plane`. When the fit is
    planar, `radius` and `center` return infinity.
- `pointfitting.sphere_fit`
  - `SphereFit(weight_func)`: an `AlgebraicSphere` fitted to points without
    normals. `add_neighbor` weights a global point and keeps it only if its
    weight is positive. `finalize` solves for the coefficients and
    `compute(points)` does both steps over an iterable. A point is a
    coordinate array or an object with a `pos` attribute. The fit is
    `UNDEFINED` with fewer than 3 neighbours, `UNSTABLE` with fewer than 6,
    and `STABLE` otherwise.
- `pointfitting.means`: cooperative mixins that add up a sum once for every
  neighbour they are given.
  - `MeanPosition` sums `w * local_q` into `sum_p`.
  - `MeanNormal` sums `w * attributes.normal` into `sum_n`.
  - `MeanPositionDer` and `MeanNormalDer` also take the weight derivatives
    `dw` and build `d_sum_p` and `d_sum_n`, with one column per derivative.
  - Every class keeps `sum_w` and `nb_neighbors`.
- `pointfitting.curvature`
  - `CurvatureEstimator`: stores two principal curvatures and their 3D
    directions. `set_curvature_values` orders them so that `|k1| >= |k2|`.
    The values are read with `k1`, `k2`, `k1_direction`, `k2_direction`,
    `k_mean`, `gaussian_curvature` and `is_valid`.

## Fitting a sphere

The package ships no concrete kernel. Any object with `f`, `df` and `ddf`
will do:

```python
import numpy as np

from pointfitting.sphere_fit import SphereFit
from pointfitting.weighting import DistWeightFunc


class SmoothKernel:
    def f(self, x):
        return (x * x - 1.0) ** 2

    def df(self, x):
        return 4.0 * x * (x * x - 1.0)

    def ddf(self, x):
        return 12.0 * x * x - 4.0


rng = np.random.default_rng(0)
directions = rng.normal(size=(500, 3))
directions /= np.linalg.norm(directions, axis=1, keepdims=True)
points = np.array([1.0, 2.0, 3.0]) + 2.5 * directions

fit = SphereFit(DistWeightFunc(SmoothKernel(), t=10.0))
fit.init(points[0])
fit.compute(points)

if fit.is_stable():
    print(fit.radius())   # close to 2.5
    print(fit.center())   # close to (1, 2, 3)
    print(fit.potential(points[1]))
```

`init` sets the evaluation point. Every query passed to the fit, such as
`potential` or `center`, uses global coordinates.

## What the package does not do

- It has no spatial index and no nearest-neighbour or radius search. You
  choose the neighbours yourself and pass them to `compute`, or rely on the
  weight function, which drops points beyond the scale `t`.
- `SphereFit` is the only fitting procedure. There are no plane, line or
  oriented sphere fits.
- `CurvatureEstimator` only stores curvature values. It does not compute them
  from a fit.
- There is no command-line tool.