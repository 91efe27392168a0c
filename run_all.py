#!/usr/bin/env python3
"""
Full verification script.

Regenerates the prime counts, nth primes and factorizations listed in the
config, checks them against the known values, and writes the tables as CSV.

Usage:
    python run_all.py
    python run_all.py --config config/custom.yaml
"""

import argparse
import time
from pathlib import Path

import pandas as pd
import yaml

from prime_data.estimate import nth_prime_bounds, upper_bound
from prime_data.factorization import Factorization
from prime_data.prime_store import PrimeData


def run_count_checks(count_bounds: dict) -> pd.DataFrame:
    """Generate data up to each bound and compare pi(n) with the known value."""
    rows = []
    for n, expected in sorted(count_bounds.items()):
        start = time.time()
        data = PrimeData.generate(0, n)
        count = data.count_primes()
        elapsed = time.time() - start

        estimate = upper_bound(n)
        rows.append({
            'n': n,
            'pi_n': count,
            'expected': expected,
            'ok': count == expected,
            'upper_bound': estimate,
            'relative_error': (estimate - count) / count if count else 0.0,
            'blocks': len(data.blocks),
            'seconds': elapsed,
        })
        status = "✓" if count == expected else f"✗ (expected {expected})"
        print(f"  pi({n:,}) = {count:,} {status}  [{elapsed:.2f}s]")
    return pd.DataFrame(rows)


def run_nth_prime_checks(nth_primes: dict, store_bound: int) -> pd.DataFrame:
    """Look up each nth prime in one shared store."""
    data = PrimeData.generate(0, store_bound)
    rows = []
    for n, expected in sorted(nth_primes.items()):
        got = data.nth_prime(n)
        lo, hi = nth_prime_bounds(n)
        rows.append({'n': n, 'p_n': got, 'expected': expected,
                     'ok': got == expected, 'bound_lo': lo, 'bound_hi': hi})
        status = "✓" if got == expected else f"✗ (expected {expected})"
        print(f"  p_{n:,} = {got:,} {status}")
    return pd.DataFrame(rows)


def run_factorization_checks(numbers: list) -> pd.DataFrame:
    """Factorize each number and rebuild it from its factors."""
    rows = []
    for x in numbers:
        factors = Factorization.from_int(x)
        rebuilt = factors.as_int()
        rows.append({'x': x, 'factors': repr(factors), 'divisors': len(factors.all_factors()),
                     'omega': factors.omega(), 'ok': rebuilt == x})
        status = "✓" if rebuilt == x else f"✗ (rebuilt {rebuilt})"
        print(f"  {x:,} = {factors} {status}")
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description='Verify prime data against known values')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    args = parser.parse_args()

    # Load config
    with open(args.config) as f:
        config = yaml.safe_load(f)

    print("=" * 60)
    print("Prime Data - Verification Suite")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  count bounds = {sorted(config['count_bounds'])}")
    print(f"  nth primes = {sorted(config['nth_primes'])}")
    print(f"  nth prime store bound = {config['nth_prime_store_bound']:,}")
    print()

    output_dir = Path(config['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)

    total_start = time.time()

    print("-" * 60)
    print("1. Prime counts")
    print("-" * 60)
    start = time.time()
    df_counts = run_count_checks(config['count_bounds'])
    df_counts.to_csv(output_dir / 'prime_counts.csv', index=False)
    print(f"   Completed in {time.time() - start:.1f}s")
    print()

    print("-" * 60)
    print("2. Nth primes")
    print("-" * 60)
    start = time.time()
    df_nth = run_nth_prime_checks(config['nth_primes'], config['nth_prime_store_bound'])
    df_nth.to_csv(output_dir / 'nth_primes.csv', index=False)
    print(f"   Completed in {time.time() - start:.1f}s")
    print()

    print("-" * 60)
    print("3. Factorizations")
    print("-" * 60)
    start = time.time()
    df_factors = run_factorization_checks(config['factorize'])
    df_factors.to_csv(output_dir / 'factorizations.csv', index=False)
    print(f"   Completed in {time.time() - start:.1f}s")
    print()

    total_time = time.time() - total_start
    failures = (~df_counts['ok']).sum() + (~df_nth['ok']).sum() + (~df_factors['ok']).sum()

    print("=" * 60)
    print("COMPLETE" if failures == 0 else f"FAILED ({failures} mismatches)")
    print("=" * 60)
    print(f"\nTotal runtime: {total_time:.1f}s")
    print(f"\nOutputs saved to: {output_dir.absolute()}")

    print("\nPrime counts vs upper bound estimate:")
    print(df_counts[['n', 'pi_n', 'upper_bound', 'relative_error', 'seconds']].to_string(index=False))

    return 0 if failures == 0 else 1


if __name__ == '__main__':
    raise SystemExit(main())
