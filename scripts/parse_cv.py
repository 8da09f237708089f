# scripts/parse_cv.py
import argparse
from tsebo.main import run_parse


def main():
    parser = argparse.ArgumentParser(description="Extract structured fields from a PDF/DOCX CV")
    parser.add_argument("cv", help="path to a .pdf or .docx file")
    parser.add_argument("--out", default=None, help="write JSON here instead of stdout")
    parser.add_argument("--config", default=None)
    args = parser.parse_args()
    run_parse(args.cv, args.out, args.config)


if __name__ == "__main__":
    main()
