"""
Batched property retrieval and tabular export
"""
import time
import logging
from dataclasses import asdict, fields
from typing import Dict, Iterable, List, Sequence, Union

import pandas as pd
from tqdm import tqdm

try:
    from itertools import batched
except ImportError:
    from more_itertools import batched

from .client import Compound
from .errors import PugRestError
from .models import Properties
from .parser import PROPERTIES_FIELDS
from .properties import CompoundProperty
from .settings import CHUNK_SIZE, SLEEP_PROP

PropertySelection = Sequence[Union[CompoundProperty, str]]

# wire name -> DataFrame column
PROPERTY_COLUMNS = {name: attr for name, (attr, _) in PROPERTIES_FIELDS.items() if name != "CID"}


class PropertyTableProcessor:
    """多数のCIDのプロパティをバッチで取得し DataFrame にまとめるクラス"""

    def __init__(self, chunk_size: int = CHUNK_SIZE, sleep: float = SLEEP_PROP):
        self.logger = logging.getLogger(__name__)
        self.chunk_size = chunk_size
        self.sleep = sleep

    def fetch_properties_batched(self, cids: Iterable[int],
                                 properties: PropertySelection) -> Dict[int, Properties]:
        """バッチでCIDのプロパティを取得"""
        res: Dict[int, Properties] = {}
        cids = list(cids)
        if not cids:
            return res

        chunks = [list(chunk) for chunk in batched(cids, self.chunk_size)]
        total_chunks = len(chunks)
        self.logger.info(f"プロパティ取得開始: {len(cids)} CID を {total_chunks} バッチで処理")

        for chunk_idx, chunk in enumerate(tqdm(chunks, desc="プロパティ取得"), 1):
            try:
                table = Compound.with_cids(chunk).property_table(*properties)
                for p in table.properties:
                    res[p.cid] = p
                self.logger.info(f"バッチ {chunk_idx}/{total_chunks}: {len(table.properties)} 件のプロパティ取得成功")
            except PugRestError as e:
                self.logger.warning(f"バッチ {chunk_idx}/{total_chunks}: バッチ取得失敗、個別取得にフォールバック - {e}")
                for cid in chunk:
                    try:
                        res[cid] = Compound(cid).properties(*properties)
                        self.logger.debug(f"CID {cid}: 個別プロパティ取得成功")
                    except PugRestError as single_e:
                        self.logger.warning(f"CID {cid}: 個別プロパティ取得失敗 - {single_e}")

            if chunk_idx < total_chunks:
                time.sleep(self.sleep)

        self.logger.info(f"プロパティ取得完了: {len(res)} 件成功")
        return res

    def to_dataframe(self, records: Dict[int, Properties],
                     properties: PropertySelection = ()) -> pd.DataFrame:
        """
        取得結果を1行1CIDの DataFrame に変換

        Args:
            records: fetch_properties_batched の戻り値
            properties: 指定した場合、CID とこれらの列のみを残す

        Returns:
            CID をインデックスとする DataFrame
        """
        rows: List[dict] = [asdict(p) for p in records.values()]
        df = pd.DataFrame(rows, columns=[f.name for f in fields(Properties)])
        if properties:
            columns = [PROPERTY_COLUMNS[CompoundProperty(p).wire_name] for p in properties]
            keep = ["cid"] + list(dict.fromkeys(columns))
            df = df[keep]
        df = df.set_index("cid").sort_index()
        self.logger.info(f"DataFrame作成完了: {len(df)} 行")
        return df

