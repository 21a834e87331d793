from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

Path = Tuple[str, ...]


class TaxonomyItem(BaseModel):
    label: str
    path: Path                               # ancestor labels followed by this label
    depth: int = Field(ge=0)                 # number of ancestors, root is 0
    children: Optional[List["TaxonomyItem"]] = None
    custom: bool = False                     # added by the user, not part of the source tree

    @property
    def is_leaf(self) -> bool:
        return not self.children


class TaxonomyOptions(BaseModel):
    # camelCase aliases accept the prop names JS front-ends send
    model_config = ConfigDict(populate_by_name=True)

    leafs_only: bool = Field(default=False, alias="leafsOnly")
    show_full_path: bool = Field(default=False, alias="showFullPath")
    path_separator: str = Field(default=" / ", alias="pathSeparator")
    max_usages: Optional[int] = Field(default=None, ge=0, alias="maxUsages")
    placeholder: Optional[str] = None


class TaxonomyOptionsResolved(TaxonomyOptions):
    max_usages_reached: bool = Field(default=False, alias="maxUsagesReached")


class NodeView(BaseModel):
    label: str
    path: Path
    depth: int
    custom: bool = False
    leaf: bool
    checked: bool
    indeterminate: bool
    disabled: bool
    reason: Optional[str] = None             # tooltip text when disabled
    expanded: bool
    children: List["NodeView"] = Field(default_factory=list)


class SelectedEntry(BaseModel):
    path: Path
    text: str


class ViewRequest(BaseModel):
    selected: List[Path] = Field(default_factory=list)
    options: TaxonomyOptions = Field(default_factory=TaxonomyOptions)
    search: str = ""
    items: Optional[List[TaxonomyItem]] = None


class ToggleRequest(BaseModel):
    selected: List[Path] = Field(default_factory=list)
    options: TaxonomyOptions = Field(default_factory=TaxonomyOptions)
    path: Path
    value: bool
    items: Optional[List[TaxonomyItem]] = None


class ToggleResponse(BaseModel):
    selected: List[Path]
    changed: bool
    reason: Optional[str] = None
