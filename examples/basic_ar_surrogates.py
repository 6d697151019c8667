"""
Basic AR Surrogate Example

This script demonstrates generating AR surrogates of a multivariate
time course and testing its functional connectivity against them.
"""

import numpy as np

from arsurrogates import generate_ar_surrogates
from arsurrogates.surrogates import testing as fc_testing
from arsurrogates.testdata import make_test_dataframe


def main():
    # ============================================================
    # 1. LOAD DATA
    # ============================================================
    print("Loading data...")

    # For this example, create synthetic ROI data
    # (roi_empty is all zeros and is dropped before fitting)
    data = make_test_dataframe(n=300, seed=42)

    print(f"Data shape: {data.shape}")
    print(f"Columns: {data.columns.tolist()}")

    # ============================================================
    # 2. GENERATE SURROGATES
    # ============================================================
    surr, channels = generate_ar_surrogates(
        data,
        n_surr=99,
        order=1,
        distribution='gaussian',
        seed=42,
        return_channels=True,
        verbose=True
    )

    print(f"Surrogates shape: {surr.shape}")
    print(f"Retained channels: {data.columns[channels].tolist()}")

    # ============================================================
    # 3. TEST DYNAMIC FC
    # ============================================================
    print("\nTesting FC variability against AR surrogates...")

    result = fc_testing.test_connectivity(
        data,
        n_surr=99,
        order=1,
        distribution='nongaussian',
        statistic='variability',
        window=60,
        step=5,
        seed=42
    )

    summary = fc_testing.summarize_connectivity_test(result, data.columns.tolist())
    print(summary.to_string(index=False))

    n_sig = int(np.sum(summary['significant']))
    print(f"\n{n_sig} of {len(summary)} edges exceed the AR null")


if __name__ == "__main__":
    main()
