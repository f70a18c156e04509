from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Meta(BaseModel):
	"""Pagination metadata of the crates listing"""
	total: int
	next_page: Optional[str] = None
	prev_page: Optional[str] = None


class CrateLinks(BaseModel):
	"""Relative API links attached to a crate"""
	owner_team: str
	owner_user: str
	owners: str
	reverse_dependencies: str
	version_downloads: str
	versions: Optional[str] = None


class Crate(BaseModel):
	id: str
	name: str
	description: Optional[str] = None
	license: Optional[str] = None
	documentation: Optional[str] = None
	homepage: Optional[str] = None
	repository: Optional[str] = None
	downloads: int
	recent_downloads: Optional[int] = None
	categories: Optional[list[str]] = None
	keywords: Optional[list[str]] = None
	versions: Optional[list[int]] = None
	max_version: str
	links: CrateLinks
	created_at: dt.datetime
	updated_at: dt.datetime
	exact_match: Optional[bool] = None


class Crates(BaseModel):
	"""One page of the crates listing"""
	crates: list[Crate]
	meta: Meta


class User(BaseModel):
	avatar: Optional[str] = None
	email: Optional[str] = None
	id: int
	kind: Optional[str] = None
	login: str
	name: Optional[str] = None
	url: str


class VersionLinks(BaseModel):
	authors: str
	dependencies: str
	version_downloads: str


class Version(BaseModel):
	"""A published version of a crate"""
	model_config = ConfigDict(populate_by_name=True)

	crate_name: str = Field(alias="crate")
	created_at: dt.datetime
	updated_at: dt.datetime
	dl_path: str
	downloads: int
	features: dict[str, list[str]]
	id: int
	num: str
	yanked: bool
	license: Optional[str] = None
	readme_path: Optional[str] = None
	links: VersionLinks
	crate_size: Optional[int] = None
	published_by: Optional[User] = None


class VersionResponse(BaseModel):
	version: Version


class Category(BaseModel):
	category: str
	crates_cnt: int
	created_at: dt.datetime
	description: str
	id: str
	slug: str


class Keyword(BaseModel):
	id: str
	keyword: str
	crates_cnt: int
	created_at: dt.datetime


class CrateResponse(BaseModel):
	"""Full record of a single crate with its categories, keywords and versions"""
	model_config = ConfigDict(populate_by_name=True)

	categories: list[Category]
	crate_data: Crate = Field(alias="crate")
	keywords: list[Keyword]
	versions: list[Version]


class Summary(BaseModel):
	"""Registry front page statistics"""
	just_updated: list[Crate]
	most_downloaded: list[Crate]
	new_crates: list[Crate]
	most_recently_downloaded: list[Crate]
	num_crates: int
	num_downloads: int
	popular_categories: list[Category]
	popular_keywords: list[Keyword]


class VersionDownloads(BaseModel):
	date: dt.date
	downloads: int
	version: int


class ExtraDownloads(BaseModel):
	date: dt.date
	downloads: int


class DownloadsMeta(BaseModel):
	extra_downloads: list[ExtraDownloads]


class Downloads(BaseModel):
	"""Daily download counts per version, plus counts for versions outside the top ones"""
	version_downloads: list[VersionDownloads]
	meta: DownloadsMeta


class AuthorsMeta(BaseModel):
	names: list[str]


class AuthorsResponse(BaseModel):
	meta: AuthorsMeta
	users: list[User]


class Authors(BaseModel):
	"""Authors of a version: free-form names plus registered users"""
	names: list[str]
	users: list[User]

	@classmethod
	def from_response(cls, resp: AuthorsResponse) -> "Authors":
		return cls(names=resp.meta.names, users=resp.users)


class Owners(BaseModel):
	users: list[User]


class Dependency(BaseModel):
	crate_id: str
	default_features: bool
	downloads: int
	features: list[str]
	id: int
	kind: str
	optional: bool
	req: str
	target: Optional[str] = None
	version_id: int


class Dependencies(BaseModel):
	dependencies: list[Dependency]


class TotalMeta(BaseModel):
	total: int


class Categories(BaseModel):
	categories: list[Category]
	meta: TotalMeta


class CategoryResponse(BaseModel):
	category: Category


class Keywords(BaseModel):
	keywords: list[Keyword]
	meta: TotalMeta


class KeywordResponse(BaseModel):
	keyword: Keyword
