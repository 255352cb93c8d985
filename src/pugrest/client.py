"""
PubChem PUG REST client for fetching chemical compound information
"""
import logging
from typing import Iterable, List, Optional, Type, TypeVar, Union

from .errors import MissingRecordError, RequestError, classify_fault
from .models import Fault, IdentifierList, InformationList, Properties, PropertyTable
from .parser import from_api_response
from .properties import CompoundProperty
from .settings import BASE_URL, FAULT_STATUS_CODES, READ_CHUNK_SIZE
from .utils import safe_post

T = TypeVar("T")

XML_HEADERS = {
    "Accept": "application/xml",
    "Content-Type": "application/x-www-form-urlencoded",
}


class Compound:
    """
    1つの化合物（または化合物の集合）を PUG REST で参照するハンドル

    namespace と identifier はフォームの本文として POST されるため、
    SMILES や InChI のような URL に載せにくい文字列もそのまま扱える。
    """

    def __init__(self, cid: Union[int, str], namespace: str = "cid"):
        self.logger = logging.getLogger(__name__)
        self.namespace = namespace
        self.identifier = str(cid)

    @classmethod
    def with_name(cls, name: str) -> "Compound":
        return cls(name, namespace="name")

    @classmethod
    def with_smiles(cls, smiles: str) -> "Compound":
        return cls(smiles, namespace="smiles")

    @classmethod
    def with_inchi(cls, inchi: str) -> "Compound":
        return cls(inchi, namespace="inchi")

    @classmethod
    def with_inchikey(cls, inchikey: str) -> "Compound":
        return cls(inchikey, namespace="inchikey")

    @classmethod
    def with_cids(cls, cids: Iterable[int]) -> "Compound":
        """複数CIDをまとめて参照（カンマ区切りで送信）"""
        return cls(",".join(str(cid) for cid in cids), namespace="cid")

    def __repr__(self) -> str:
        return f"Compound(namespace={self.namespace!r}, identifier={self.identifier!r})"

    def request(self, operation: str, record_type: Type[T]) -> T:
        """
        PUG REST に operation を要求し、応答を record_type としてデコード

        Fault 本文を返すステータスコードは Fault をデコードして ApiError を送出し、
        それ以外の失敗ステータスは RequestError として送出する。
        """
        url = f"{BASE_URL}/compound/{self.namespace}/{operation}/XML"
        form = {self.namespace: self.identifier}
        self.logger.debug(f"{self!r}: {operation} を要求")

        response = safe_post(url, data=form, headers=XML_HEADERS)
        with response:
            body = response.iter_content(chunk_size=READ_CHUNK_SIZE)

            if response.status_code in FAULT_STATUS_CODES:
                fault = from_api_response(Fault, body)
                self.logger.debug(f"{self!r}: {operation} 失敗 ({response.status_code}) - {fault.code}")
                raise classify_fault(fault)

            if not response.ok:
                raise RequestError(
                    f"{operation}: HTTP {response.status_code} {response.reason}",
                    status_code=response.status_code,
                )

            return from_api_response(record_type, body)

    # ------------------------------------------------------------------
    # Properties

    def property_table(self, *properties: Union[CompoundProperty, str]) -> PropertyTable:
        """指定したプロパティを <PropertyTable> として取得"""
        if not properties:
            raise ValueError("at least one property must be requested")
        names = ",".join(CompoundProperty(p).wire_name for p in properties)
        return self.request(f"property/{names}", PropertyTable)

    def properties(self, *properties: Union[CompoundProperty, str]) -> Properties:
        """
        化合物のプロパティを一度に取得

        Args:
            properties: 取得する CompoundProperty（またはその名前）

        Returns:
            要求したフィールドが埋まった Properties（1件）
        """
        table = self.property_table(*properties)
        if not table.properties:
            raise MissingRecordError(f"{self!r}: PropertyTable contained no Properties")
        return table.properties[-1]

    def title(self) -> Optional[str]:
        """PubChem での代表名を取得"""
        return self.properties(CompoundProperty.TITLE).title

    def molecular_formula(self) -> Optional[str]:
        """分子式を取得"""
        return self.properties(CompoundProperty.MOLECULAR_FORMULA).molecular_formula

    def molecular_weight(self) -> Optional[str]:
        return self.properties(CompoundProperty.MOLECULAR_WEIGHT).molecular_weight

    def canonical_smiles(self) -> Optional[str]:
        return self.properties(CompoundProperty.CANONICAL_SMILES).canonical_smiles

    def iupac_name(self) -> Optional[str]:
        return self.properties(CompoundProperty.IUPAC_NAME).iupac_name

    def inchi_key(self) -> Optional[str]:
        return self.properties(CompoundProperty.INCHI_KEY).inchi_key

    # ------------------------------------------------------------------
    # Identifier lists

    def cids(self) -> List[int]:
        """化合物を指す CID のリストを取得"""
        return self.request("cids", IdentifierList).cids

    def sids(self) -> List[int]:
        """化合物に関連付けられた SID のリストを取得"""
        info_list = self.request("sids", InformationList)
        return [sid for info in info_list.informations for sid in info.sids]

    def aids(self) -> List[int]:
        """化合物が試験された AID のリストを取得"""
        info_list = self.request("aids", InformationList)
        return [aid for info in info_list.informations for aid in info.aids]

    def synonyms(self) -> List[str]:
        """化合物の同義語を取得"""
        info_list = self.request("synonyms", InformationList)
        return [name for info in info_list.informations for name in info.synonyms]
