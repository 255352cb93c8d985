"""
Data models for PubChem PUG REST XML responses
"""
from typing import List, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Fault:
    """エラー応答 <Fault> の内容"""
    code: str = ""
    message: str = ""
    details: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Waiting:
    """非同期クエリの待機応答 <Waiting>"""
    list_key: str = ""
    message: Optional[str] = None


@dataclass(frozen=True)
class Properties:
    """1化合物分のプロパティ（CID以外は要求されたもののみ設定される）"""
    cid: int = 0
    molecular_formula: Optional[str] = None
    molecular_weight: Optional[str] = None
    canonical_smiles: Optional[str] = None
    isomeric_smiles: Optional[str] = None
    inchi: Optional[str] = None
    inchi_key: Optional[str] = None
    iupac_name: Optional[str] = None
    xlogp: Optional[float] = None
    exact_mass: Optional[str] = None
    monoisotopic_mass: Optional[str] = None
    tpsa: Optional[float] = None
    complexity: Optional[int] = None
    charge: Optional[int] = None
    hbond_donor_count: Optional[int] = None
    hbond_acceptor_count: Optional[int] = None
    rotatable_bond_count: Optional[int] = None
    heavy_atom_count: Optional[int] = None
    isotope_atom_count: Optional[int] = None
    atom_stereo_count: Optional[int] = None
    defined_atom_stereo_count: Optional[int] = None
    undefined_atom_stereo_count: Optional[int] = None
    bond_stereo_count: Optional[int] = None
    defined_bond_stereo_count: Optional[int] = None
    undefined_bond_stereo_count: Optional[int] = None
    covalent_unit_count: Optional[int] = None
    volume_3d: Optional[float] = None
    x_steric_quadrupole_3d: Optional[float] = None
    y_steric_quadrupole_3d: Optional[float] = None
    z_steric_quadrupole_3d: Optional[float] = None
    feature_count_3d: Optional[int] = None
    feature_acceptor_count_3d: Optional[int] = None
    feature_donor_count_3d: Optional[int] = None
    feature_anion_count_3d: Optional[int] = None
    feature_cation_count_3d: Optional[int] = None
    feature_ring_count_3d: Optional[int] = None
    feature_hydrophobe_count_3d: Optional[int] = None
    conformer_model_rmsd_3d: Optional[float] = None
    effective_rotor_count_3d: Optional[float] = None
    conformer_count_3d: Optional[int] = None
    fingerprint_2d: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class PropertyTable:
    """<PropertyTable> 応答"""
    properties: List[Properties] = field(default_factory=list)


@dataclass(frozen=True)
class IdentifierList:
    """<IdentifierList> 応答（CID/SID/AID のいずれか一つが埋まる）"""
    cids: List[int] = field(default_factory=list)
    sids: List[int] = field(default_factory=list)
    aids: List[int] = field(default_factory=list)
    list_key: Optional[str] = None
    size: Optional[int] = None
    entrez_db: Optional[str] = None
    entrez_web_env: Optional[str] = None
    entrez_query_key: Optional[int] = None
    entrez_url: Optional[str] = None
    cache_key: Optional[str] = None


@dataclass(frozen=True)
class DateTime:
    """部分的な日時（各要素は独立して欠落しうる）"""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None


@dataclass(frozen=True)
class Annotation:
    heading: str = ""
    type: str = ""


@dataclass(frozen=True)
class Information:
    """<Information> 1件分の相互参照・同義語・記述情報"""
    id: int = 0
    synonyms: List[str] = field(default_factory=list)
    cids: List[int] = field(default_factory=list)
    sids: List[int] = field(default_factory=list)
    aids: List[int] = field(default_factory=list)
    gis: List[int] = field(default_factory=list)
    gene_ids: List[int] = field(default_factory=list)
    deposition_date: Optional[DateTime] = None
    modification_date: Optional[DateTime] = None
    creation_date: Optional[DateTime] = None
    hold_date: Optional[DateTime] = None
    registry_ids: List[str] = field(default_factory=list)
    rns: List[str] = field(default_factory=list)
    pubmed_ids: List[int] = field(default_factory=list)
    mmdb_ids: List[int] = field(default_factory=list)
    db_urls: List[str] = field(default_factory=list)
    sb_urls: List[str] = field(default_factory=list)
    protein_gis: List[int] = field(default_factory=list)
    nucleotide_gis: List[int] = field(default_factory=list)
    taxonomy_ids: List[int] = field(default_factory=list)
    mim_ids: List[int] = field(default_factory=list)
    probe_ids: List[int] = field(default_factory=list)
    patent_ids: List[str] = field(default_factory=list)
    protein_names: List[str] = field(default_factory=list)
    gene_symbols: List[str] = field(default_factory=list)
    source_names: List[str] = field(default_factory=list)
    source_categories: List[str] = field(default_factory=list)
    title: Optional[str] = None
    description: Optional[str] = None
    description_source_name: Optional[str] = None
    description_url: Optional[str] = None
    conformer_ids: List[str] = field(default_factory=list)
    protein_accessions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class InformationList:
    """<InformationList> 応答"""
    informations: List[Information] = field(default_factory=list)
    source_names: List[str] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
