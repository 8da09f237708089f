# scripts/run_matcher.py
import argparse
from tsebo.main import run_match


def main():
    parser = argparse.ArgumentParser(description="Rank candidates against a job")
    parser.add_argument("--job", default="data/job.yaml")
    parser.add_argument("--candidates", default="data/candidates.yaml")
    parser.add_argument("--out", default=None, help="output directory (default: data/results)")
    parser.add_argument("--top-n", type=int, default=None)
    parser.add_argument("--config", default=None)
    args = parser.parse_args()
    run_match(args.job, args.candidates, args.out, args.top_n, args.config)


if __name__ == "__main__":
    main()
