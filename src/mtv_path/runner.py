"""
Path Runner: orchestrates preparation, evaluation and sampling.

This module provides the main entry point that turns a base matrix, a set
of vectors and a RunConfig into sampled trajectories for one or both
backends.
"""

from typing import Any, Optional, Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .core.config import RunConfig
    from .sampling import SamplingResult


def run_paths(
    A: Any,
    vectors: Sequence[Sequence[float]],
    config: Optional["RunConfig"] = None,
) -> "SamplingResult":
    """
    Run the full path pipeline.

    Args:
        A: Base matrix (before scalar/exponent/normalization)
        vectors: Vectors to carry along the path
        config: Run configuration (default: get_default_config())

    Returns:
        SamplingResult with config and matrix hashes in info
    """
    from .activation import resolve_activation
    from .core.config import get_default_config
    from .core.hashing import compute_config_hash, compute_matrix_hash
    from .core.logging import get_logger, setup_logging
    from .paths.base import TransformOptions
    from .paths.evaluator import MatrixBackend
    from .preparation import prepare_matrix
    from .sampling import SamplingResult, build_sample_times, compute_backend_paths

    logger = get_logger()
    if config is None:
        config = get_default_config()
    if config.log_level:
        setup_logging(config.log_level)

    logger.info(f"Starting path run: {config.run_name}")

    prep = config.preparation
    prepared = prepare_matrix(A, prep.scalar, prep.exponent, prep.normalize)
    if prepared.normalization_failed:
        logger.warning("Normalization requires a non-zero determinant. Matrix left unnormalized.")
    if not prepared.ok:
        return SamplingResult(error=prepared.error)

    activation = resolve_activation(config.activation.name, config.activation.custom_expression)
    if activation.error:
        return SamplingResult(error=f"Activation Function Error: {activation.error}")

    sampling = config.sampling
    times = build_sample_times(
        sampling.start_t, sampling.end_t, sampling.t_precision, sampling.path_resolution
    )
    if times.size == 0:
        return SamplingResult(error="Animation End Time must be greater than Start Time.")

    if sampling.compare_backends:
        backends = [MatrixBackend.KAN, MatrixBackend.EXP_LOG]
    else:
        backends = [MatrixBackend.coerce(config.evaluator.backend)]

    logger.info(
        f"Sampling {len(times)} times on {', '.join(b.value for b in backends)} "
        f"for {len(vectors)} vectors"
    )
    options = TransformOptions(
        linear_eigen_interpolation=config.evaluator.linear_eigen_interpolation
    )
    result = compute_backend_paths(
        prepared.matrix,
        vectors,
        times,
        backends=backends,
        options=options,
        activation=activation.fn,
        cache_max_entries=config.evaluator.cache_max_entries,
        time_decimals=config.evaluator.time_decimals,
    )

    result.info.update({
        "run_name": config.run_name,
        "config_hash": compute_config_hash(config),
        "matrix_hash": compute_matrix_hash(prepared.matrix),
        "effective_matrix": np.asarray(prepared.matrix).tolist(),
        "determinant": prepared.determinant_after
        if prepared.normalization_applied else prepared.determinant_before,
        "n_samples": int(times.size),
    })

    logger.info("Path run complete.")
    return result
