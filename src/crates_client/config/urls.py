from __future__ import annotations

from urllib.parse import quote, urlencode

from ..core.query import Query


def _join(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path}"


def _seg(value: str) -> str:
    # a name containing "/" must not reach a different endpoint
    return quote(value, safe="")


def _paged(base_url: str, path: str, page: int | None, per_page: int | None) -> str:
    params: dict[str, int] = {}
    if page is not None:
        params["page"] = page
    if per_page is not None:
        params["per_page"] = per_page
    url = _join(base_url, path)
    return f"{url}?{urlencode(params)}" if params else url


def get_crates_url(base_url: str, query: Query) -> str:
	return f"{_join(base_url, 'crates')}?{urlencode(query.to_params())}"


def get_crate_url(base_url: str, name: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}")


def get_version_url(base_url: str, name: str, version: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/{_seg(version)}")


def get_dependencies_url(base_url: str, name: str, version: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/{_seg(version)}/dependencies")


def get_authors_url(base_url: str, name: str, version: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/{_seg(version)}/authors")


def get_readme_url(base_url: str, name: str, version: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/{_seg(version)}/readme")


def get_owners_url(base_url: str, name: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/owners")


def get_downloads_url(base_url: str, name: str) -> str:
	return _join(base_url, f"crates/{_seg(name)}/downloads")


def get_summary_url(base_url: str) -> str:
	return _join(base_url, "summary")


def get_categories_url(base_url: str, page: int | None = None, per_page: int | None = None) -> str:
    return _paged(base_url, "categories", page, per_page)


def get_category_url(base_url: str, slug: str) -> str:
	return _join(base_url, f"categories/{_seg(slug)}")


def get_keywords_url(base_url: str, page: int | None = None, per_page: int | None = None) -> str:
    return _paged(base_url, "keywords", page, per_page)


def get_keyword_url(base_url: str, keyword: str) -> str:
	return _join(base_url, f"keywords/{_seg(keyword)}")
