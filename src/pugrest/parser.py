"""
Decoders mapping PUG REST XML documents onto the typed records in models.py
"""
import logging
from typing import Callable, Dict, Iterator, Optional, Tuple, Type, TypeVar

from .errors import UnexpectedEofError, UnexpectedElementError, UnsupportedElementError
from .models import (
    Annotation, DateTime, Fault, IdentifierList, Information, InformationList,
    Properties, PropertyTable, Waiting,
)
from .utils import parse_float, parse_int
from .xml_reader import End, Eof, Start, XmlEventReader

logger = logging.getLogger(__name__)

T = TypeVar("T")

# element name -> (attribute, reader)
FieldTable = Dict[str, Tuple[str, Callable[[Start, XmlEventReader], object]]]


# ---------------------------------------------------------------------------
# Field readers

def _text(start: Start, reader: XmlEventReader) -> str:
    return reader.read_text(start)


def _int(start: Start, reader: XmlEventReader) -> int:
    return parse_int(reader.read_text(start), start.local_name)


def _float(start: Start, reader: XmlEventReader) -> float:
    return parse_float(reader.read_text(start), start.local_name)


def _expect(start: Start, name: str) -> None:
    if start.local_name != name:
        raise UnexpectedElementError(name, start.local_name)


def _children(start: Start, reader: XmlEventReader) -> Iterator[Start]:
    """
    直下の子要素の開始タグを順に返す

    呼び出し側は受け取った子要素を終了タグまで読み切る必要がある
    (read_text / skip / 入れ子のデコーダ)。
    """
    while True:
        event = reader.read_event()
        if isinstance(event, Start):
            yield event
        elif isinstance(event, End):
            return
        else:
            raise UnexpectedEofError(start.local_name)


def _decode_fields(start: Start, reader: XmlEventReader,
                   scalars: FieldTable, repeated: Optional[FieldTable] = None) -> dict:
    """
    フィールド表に従って子要素を読み、コンストラクタ引数の dict を返す

    - scalars: 後に出現した値で上書き
    - repeated: 文書順にリストへ追加
    - 表にない要素: サブツリーごと読み飛ばす
    """
    repeated = repeated or {}
    values = {attr: [] for attr, _ in repeated.values()}
    for child in _children(start, reader):
        name = child.local_name
        if name in scalars:
            attr, read = scalars[name]
            values[attr] = read(child, reader)
        elif name in repeated:
            attr, read = repeated[name]
            values[attr].append(read(child, reader))
        else:
            logger.debug(f"<{start.local_name}>: 未知の要素 <{name}> を読み飛ばし")
            reader.skip(child)
    reader.release(start.element)
    return values


# ---------------------------------------------------------------------------
# Record decoders

FAULT_FIELDS: FieldTable = {
    "Code": ("code", _text),
    "Message": ("message", _text),
}
FAULT_REPEATED: FieldTable = {
    "Details": ("details", _text),
}


def decode_fault(start: Start, reader: XmlEventReader) -> Fault:
    _expect(start, "Fault")
    return Fault(**_decode_fields(start, reader, FAULT_FIELDS, FAULT_REPEATED))


WAITING_FIELDS: FieldTable = {
    "ListKey": ("list_key", _text),
    "Message": ("message", _text),
}


def decode_waiting(start: Start, reader: XmlEventReader) -> Waiting:
    _expect(start, "Waiting")
    return Waiting(**_decode_fields(start, reader, WAITING_FIELDS))


PROPERTIES_FIELDS: FieldTable = {
    "CID": ("cid", _int),
    "MolecularFormula": ("molecular_formula", _text),
    "MolecularWeight": ("molecular_weight", _text),
    "CanonicalSMILES": ("canonical_smiles", _text),
    "IsomericSMILES": ("isomeric_smiles", _text),
    "InChI": ("inchi", _text),
    "InChIKey": ("inchi_key", _text),
    "IUPACName": ("iupac_name", _text),
    "XLogP": ("xlogp", _float),
    "ExactMass": ("exact_mass", _text),
    "MonoisotopicMass": ("monoisotopic_mass", _text),
    "TPSA": ("tpsa", _float),
    "Complexity": ("complexity", _int),
    "Charge": ("charge", _int),
    "HBondDonorCount": ("hbond_donor_count", _int),
    "HBondAcceptorCount": ("hbond_acceptor_count", _int),
    "RotatableBondCount": ("rotatable_bond_count", _int),
    "HeavyAtomCount": ("heavy_atom_count", _int),
    "IsotopeAtomCount": ("isotope_atom_count", _int),
    "AtomStereoCount": ("atom_stereo_count", _int),
    "DefinedAtomStereoCount": ("defined_atom_stereo_count", _int),
    "UndefinedAtomStereoCount": ("undefined_atom_stereo_count", _int),
    "BondStereoCount": ("bond_stereo_count", _int),
    "DefinedBondStereoCount": ("defined_bond_stereo_count", _int),
    "UndefinedBondStereoCount": ("undefined_bond_stereo_count", _int),
    "CovalentUnitCount": ("covalent_unit_count", _int),
    "Volume3D": ("volume_3d", _float),
    "XStericQuadrupole3D": ("x_steric_quadrupole_3d", _float),
    "YStericQuadrupole3D": ("y_steric_quadrupole_3d", _float),
    "ZStericQuadrupole3D": ("z_steric_quadrupole_3d", _float),
    "FeatureCount3D": ("feature_count_3d", _int),
    "FeatureAcceptorCount3D": ("feature_acceptor_count_3d", _int),
    "FeatureDonorCount3D": ("feature_donor_count_3d", _int),
    "FeatureAnionCount3D": ("feature_anion_count_3d", _int),
    "FeatureCationCount3D": ("feature_cation_count_3d", _int),
    "FeatureRingCount3D": ("feature_ring_count_3d", _int),
    "FeatureHydrophobeCount3D": ("feature_hydrophobe_count_3d", _int),
    "ConformerModelRMSD3D": ("conformer_model_rmsd_3d", _float),
    "EffectiveRotorCount3D": ("effective_rotor_count_3d", _float),
    "ConformerCount3D": ("conformer_count_3d", _int),
    "Fingerprint2D": ("fingerprint_2d", _text),
    "Title": ("title", _text),
}


def decode_properties(start: Start, reader: XmlEventReader) -> Properties:
    _expect(start, "Properties")
    return Properties(**_decode_fields(start, reader, PROPERTIES_FIELDS))


def decode_property_table(start: Start, reader: XmlEventReader) -> PropertyTable:
    _expect(start, "PropertyTable")
    return PropertyTable(**_decode_fields(start, reader, {}, {
        "Properties": ("properties", decode_properties),
    }))


IDENTIFIER_LIST_FIELDS: FieldTable = {
    "ListKey": ("list_key", _text),
    "Size": ("size", _int),
    "EntrezDB": ("entrez_db", _text),
    "EntrezWebEnv": ("entrez_web_env", _text),
    "EntrezQueryKey": ("entrez_query_key", _int),
    "EntrezURL": ("entrez_url", _text),
    "CacheKey": ("cache_key", _text),
}
IDENTIFIER_LIST_REPEATED: FieldTable = {
    "CID": ("cids", _int),
    "SID": ("sids", _int),
    "AID": ("aids", _int),
}


def decode_identifier_list(start: Start, reader: XmlEventReader) -> IdentifierList:
    _expect(start, "IdentifierList")
    return IdentifierList(**_decode_fields(
        start, reader, IDENTIFIER_LIST_FIELDS, IDENTIFIER_LIST_REPEATED))


DATE_TIME_FIELDS: FieldTable = {
    "Year": ("year", _int),
    "Month": ("month", _int),
    "Day": ("day", _int),
    "Hour": ("hour", _int),
    "Minute": ("minute", _int),
    "Second": ("second", _int),
}
DATE_WRAPPERS = ("DateTime", "DepositionDate", "ModificationDate", "CreationDate", "HoldDate")


def _decode_date_fields(start: Start, reader: XmlEventReader) -> dict:
    values = {}
    for child in _children(start, reader):
        name = child.local_name
        if name in DATE_TIME_FIELDS:
            attr, read = DATE_TIME_FIELDS[name]
            values[attr] = read(child, reader)
        elif name == "DateTime":
            values.update(_decode_date_fields(child, reader))
        else:
            logger.debug(f"<{start.local_name}>: 未知の要素 <{name}> を読み飛ばし")
            reader.skip(child)
    reader.release(start.element)
    return values


def decode_date_time(start: Start, reader: XmlEventReader) -> DateTime:
    """
    日時要素をデコード

    <DateTime> 自体のほか、<CreationDate> などの日付ラッパー要素も受け付ける。
    ラッパー内に <DateTime> がある場合はその内容を取り込む。
    """
    if start.local_name not in DATE_WRAPPERS:
        raise UnexpectedElementError("DateTime", start.local_name)
    return DateTime(**_decode_date_fields(start, reader))


INFORMATION_FIELDS: FieldTable = {
    "ID": ("id", _int),
    "DepositionDate": ("deposition_date", decode_date_time),
    "ModificationDate": ("modification_date", decode_date_time),
    "CreationDate": ("creation_date", decode_date_time),
    "HoldDate": ("hold_date", decode_date_time),
    "Title": ("title", _text),
    "Description": ("description", _text),
    "DescriptionSourceName": ("description_source_name", _text),
    "DescriptionURL": ("description_url", _text),
}
INFORMATION_REPEATED: FieldTable = {
    "Synonym": ("synonyms", _text),
    "CID": ("cids", _int),
    "SID": ("sids", _int),
    "AID": ("aids", _int),
    "GI": ("gis", _int),
    "GeneID": ("gene_ids", _int),
    "RegistryID": ("registry_ids", _text),
    "RN": ("rns", _text),
    "PubMedID": ("pubmed_ids", _int),
    "PubMedId": ("pubmed_ids", _int),
    "MMDBID": ("mmdb_ids", _int),
    "DBURL": ("db_urls", _text),
    "SBURL": ("sb_urls", _text),
    "ProteinGI": ("protein_gis", _int),
    "NucleotideGI": ("nucleotide_gis", _int),
    "TaxonomyID": ("taxonomy_ids", _int),
    "MIMID": ("mim_ids", _int),
    "ProbeID": ("probe_ids", _int),
    "PatentID": ("patent_ids", _text),
    "ProteinName": ("protein_names", _text),
    "GeneSymbol": ("gene_symbols", _text),
    "SourceName": ("source_names", _text),
    "SourceCategory": ("source_categories", _text),
    "ConformerID": ("conformer_ids", _text),
    "ProteinAccession": ("protein_accessions", _text),
}


def decode_information(start: Start, reader: XmlEventReader) -> Information:
    _expect(start, "Information")
    return Information(**_decode_fields(
        start, reader, INFORMATION_FIELDS, INFORMATION_REPEATED))


def decode_annotation(start: Start, reader: XmlEventReader) -> Annotation:
    # TODO: decode Annotation once the heading/type layout of the service is pinned down
    _expect(start, "Annotation")
    raise UnsupportedElementError("Annotation")


def decode_information_list(start: Start, reader: XmlEventReader) -> InformationList:
    _expect(start, "InformationList")
    return InformationList(**_decode_fields(start, reader, {}, {
        "Information": ("informations", decode_information),
        "SourceName": ("source_names", _text),
        "Annotation": ("annotations", decode_annotation),
    }))


# ---------------------------------------------------------------------------
# Response dispatcher

DECODERS: Dict[type, Callable[[Start, XmlEventReader], object]] = {
    Fault: decode_fault,
    Waiting: decode_waiting,
    PropertyTable: decode_property_table,
    Properties: decode_properties,
    IdentifierList: decode_identifier_list,
    InformationList: decode_information_list,
    Information: decode_information,
    DateTime: decode_date_time,
}


def from_api_response(record_type: Type[T], source) -> T:
    """
    応答本文を読み、最初の要素を record_type としてデコード

    Args:
        record_type: 呼び出し側が期待するレコード型 (PropertyTable など)
        source: bytes / バイナリのファイルライク / バイト列チャンクのイテラブル

    Returns:
        デコード済みのレコード
    """
    try:
        decoder = DECODERS[record_type]
    except KeyError:
        raise TypeError(f"no XML decoder registered for {record_type!r}") from None

    reader = XmlEventReader(source)
    while True:
        event = reader.read_event()
        if isinstance(event, Start):
            return decoder(event, reader)
        if isinstance(event, Eof):
            raise UnexpectedEofError("xml")
