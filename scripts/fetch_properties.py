#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
fetch_properties.py
CID のリストから PubChem のプロパティを取得して CSV に保存するスクリプト

Usage:
    python scripts/fetch_properties.py --cids 2244 3672 --properties MolecularFormula Title
    python scripts/fetch_properties.py --input data/input/cids.txt --output data/output

Features:
- PUG REST の XML 応答をストリーミングでデコード
- バッチ処理による効率的なAPI利用（失敗時は個別取得にフォールバック）
- 詳細なログ出力とエラー処理
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pugrest.processor import PropertyTableProcessor
from pugrest.properties import CompoundProperty
from pugrest.settings import LOG_FORMAT, LOG_LEVEL, OUTPUT_TIMESTAMP_FORMAT

DEFAULT_PROPERTIES = [
    CompoundProperty.TITLE,
    CompoundProperty.MOLECULAR_FORMULA,
    CompoundProperty.MOLECULAR_WEIGHT,
    CompoundProperty.CANONICAL_SMILES,
    CompoundProperty.INCHI_KEY,
]


def setup_logging(log_file: str = "property_fetch.log"):
    """ログ設定を初期化"""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger(__name__)
    logger.info("=== PubChemプロパティ取得スクリプト開始 ===")
    return logger


def load_cids(input_path: Path) -> List[int]:
    """1行1CID（空行と # 始まりの行は無視）のテキストファイルを読み込み"""
    cids = []
    with open(input_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                cids.append(int(line))
    return cids


def process_cids(cids: List[int], properties: List[str], output_dir: Path) -> Path:
    """CIDのプロパティを取得してCSVに保存"""
    logger = logging.getLogger(__name__)
    processor = PropertyTableProcessor()

    records = processor.fetch_properties_batched(cids, properties)
    df = processor.to_dataframe(records, properties)

    missing = sorted(set(cids) - set(records))
    if missing:
        logger.warning(f"取得できなかったCID: {len(missing)} 件 {missing}")

    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.datetime.now().strftime(OUTPUT_TIMESTAMP_FORMAT)
    output_path = output_dir / f"properties_{timestamp}.csv"
    df.to_csv(output_path, encoding="utf-8")
    logger.info(f"保存完了: {output_path} ({len(df)} 行)")
    return output_path


def cli(argv: Optional[List[str]] = None) -> int:
    """コマンドライン インターフェース"""
    parser = argparse.ArgumentParser(
        description="CIDのリストからPubChemのプロパティを取得してCSVに保存",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--cids", nargs="+", type=int, help="取得するCID")
    source.add_argument("--input", help="1行1CIDのテキストファイルパス")
    parser.add_argument(
        "--properties",
        nargs="+",
        default=[p.wire_name for p in DEFAULT_PROPERTIES],
        choices=[p.wire_name for p in CompoundProperty],
        metavar="NAME",
        help="取得するプロパティ名 (default: Title MolecularFormula ...)"
    )
    parser.add_argument("--output", default="data/output", help="出力ディレクトリ")
    parser.add_argument(
        "--log",
        default="property_fetch.log",
        help="ログファイル名 (default: property_fetch.log)"
    )

    args = parser.parse_args(argv)

    # ログ設定
    logger = setup_logging(args.log)

    try:
        if args.input:
            input_path = Path(args.input)
            if not input_path.exists():
                logger.error(f"入力ファイルが存在しません: {input_path}")
                return 1
            cids = load_cids(input_path)
        else:
            cids = args.cids

        if not cids:
            logger.error("有効なCIDがありません。処理を終了します。")
            return 1

        process_cids(cids, args.properties, Path(args.output))
        return 0
    except Exception as e:
        logger.error(f"処理失敗: {e}", exc_info=True)
        return 1
    finally:
        logger.info("=== PubChemプロパティ取得スクリプト終了 ===")


if __name__ == "__main__":
    sys.exit(cli())
