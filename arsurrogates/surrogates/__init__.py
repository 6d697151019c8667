"""
AR surrogate generation and functional-connectivity significance testing.

This module fits an autoregressive model to an observed multivariate time
course and generates null-model surrogates that preserve its linear
temporal structure, then compares connectivity statistics against them.
"""

from .parameters import (
    DISTRIBUTIONS,
    SurrogateParams,
    check_distribution,
    spawn_generators,
)

from .generators import (
    gaussian_noise,
    empirical_noise,
    get_noise_sampler,
    generate_ar_surrogate,
    generate_ar_surrogates,
    get_ar_surrogate,
)

from .testing import (
    functional_connectivity,
    sliding_window_connectivity,
    fc_variability,
    surrogate_connectivity,
    empirical_p,
    fdr_correction,
    test_connectivity,
    summarize_connectivity_test,
)

__all__ = [
    # Parameters
    'DISTRIBUTIONS',
    'SurrogateParams',
    'check_distribution',
    'spawn_generators',
    # Generators
    'gaussian_noise',
    'empirical_noise',
    'get_noise_sampler',
    'generate_ar_surrogate',
    'generate_ar_surrogates',
    'get_ar_surrogate',
    # Testing
    'functional_connectivity',
    'sliding_window_connectivity',
    'fc_variability',
    'surrogate_connectivity',
    'empirical_p',
    'fdr_correction',
    'test_connectivity',
    'summarize_connectivity_test',
]
