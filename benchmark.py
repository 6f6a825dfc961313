import numpy as np
from suffix_tree_package import SuffixTree, SuffixTreeProcessor
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

def generate_random_strings(n: int, length: int, alphabet: str = '01') -> List[str]:
    """Generate n random strings of given length over alphabet"""
    return [''.join(np.random.choice(list(alphabet), length)) for _ in range(n)]

def run_benchmark(n_strings: int, string_length: int, alphabet: str) -> Tuple[float, float]:
    """Run benchmark and return mean build time per tree and mean nodes per symbol"""
    strings = generate_random_strings(n_strings, string_length, alphabet)

    start_time = time.time()
    trees = [SuffixTree(s) for s in strings]
    build_time = (time.time() - start_time) / n_strings

    nodes_per_symbol = np.mean([tree.node_count / (string_length + 1) for tree in trees])
    return build_time, nodes_per_symbol

def run_query_benchmark(n_strings: int, string_length: int, n_patterns: int, n_threads: int) -> float:
    """Run batch query benchmark and return total time"""
    strings = generate_random_strings(n_strings, string_length)
    patterns = generate_random_strings(n_patterns, 8)
    processor = SuffixTreeProcessor(n_threads=n_threads)

    start_time = time.time()
    processor.process_strings(strings, patterns)
    return time.time() - start_time

def main():
    # Test parameters
    string_lengths = [1_000, 5_000, 10_000, 50_000, 100_000]
    alphabets = {'binary': '01', 'dna': 'ACGT', 'lowercase': 'abcdefghijklmnopqrstuvwxyz'}
    n_strings = 5
    n_threads_list = [1, 2, 4]

    # Results storage
    results = []

    try:
        # Construction time should grow linearly with length
        for alphabet_name, alphabet in alphabets.items():
            for string_length in string_lengths:
                print(f"Testing: {n_strings} {alphabet_name} strings of length {string_length}")
                build_time, nodes_per_symbol = run_benchmark(n_strings, string_length, alphabet)
                results.append({
                    'alphabet': alphabet_name,
                    'string_length': string_length,
                    'build_time': build_time,
                    'symbols_per_second': string_length / build_time,
                    'nodes_per_symbol': nodes_per_symbol,
                })

        # Convert to DataFrame and save results
        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        # Print summary statistics
        print("\nBenchmark Summary:")
        print("=================")
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            print(f"\nAlphabet: {alphabet_name}")
            print(f"Throughput: {data['symbols_per_second'].min():.0f} - {data['symbols_per_second'].max():.0f} symbols/second")
            print(f"Nodes per symbol: {data['nodes_per_symbol'].mean():.2f}")

        print("\nBatch queries (200 strings of length 1000, 1000 patterns):")
        for n_threads in n_threads_list:
            elapsed = run_query_benchmark(200, 1_000, 1_000, n_threads)
            print(f"{n_threads} threads: {elapsed:.3f}s")

        # Create visualization
        sns.set_theme(style='whitegrid')
        plt.figure(figsize=(12, 6))

        # Plot build time vs length
        plt.subplot(1, 2, 1)
        sns.lineplot(data=df, x='string_length', y='build_time', hue='alphabet', marker='o')
        plt.xlabel('String Length')
        plt.ylabel('Build Time per Tree (s)')
        plt.title('Build Time vs Length')

        # Plot throughput
        plt.subplot(1, 2, 2)
        sns.lineplot(data=df, x='string_length', y='symbols_per_second', hue='alphabet', marker='o')
        plt.xlabel('String Length')
        plt.ylabel('Symbols per Second')
        plt.title('Throughput vs Length')

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
