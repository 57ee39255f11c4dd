from typing import Dict, List, Optional

VERSION_PLACEHOLDER = "VERSION"

# Pre-filled component data for well-known products, keyed by lowercase name
KNOWN_COMPONENTS: Dict[str, Dict] = {
    "apache": {
        "type": "application",
        "versions": ["2.4.57", "2.4.56", "2.4.55", "2.4.54"],
        "supplier": "Apache Software Foundation",
        "author": "Apache Software Foundation",
        "description": (
            "The Apache HTTP Server Project is a collaborative software development effort "
            "aimed at creating a robust, commercial-grade, featureful, and freely-available "
            "source code implementation of an HTTP (Web) server."
        ),
        "licenses": ["Apache-2.0"],
        "purl": "pkg:generic/httpd@VERSION",
        "cpe": "cpe:2.3:a:apache:http_server:VERSION",
        "homepage": "https://httpd.apache.org",
        "downloadLocation": "https://httpd.apache.org/download.cgi",
        "copyrightText": "Copyright The Apache Software Foundation",
    },
    "nginx": {
        "type": "application",
        "versions": ["1.24.0", "1.22.1", "1.20.2"],
        "supplier": "NGINX Software Inc.",
        "author": "Igor Sysoev",
        "description": (
            "NGINX is a free, open-source, high-performance HTTP server and reverse proxy, "
            "as well as an IMAP/POP3 proxy server."
        ),
        "licenses": ["BSD-2-Clause"],
        "purl": "pkg:generic/nginx@VERSION",
        "cpe": "cpe:2.3:a:nginx:nginx:VERSION",
        "homepage": "https://nginx.org",
        "downloadLocation": "https://nginx.org/en/download.html",
        "copyrightText": "Copyright (C) 2002-2024 Igor Sysoev",
    },
}


def find_templates(query: str, version: Optional[str] = None) -> List[Dict]:
    """
    Return component templates whose key overlaps the query in either
    direction ("apache" matches "Apache HTTP Server" and "apa").
    The VERSION placeholder in purl/cpe is filled with `version`, or with
    the newest known version when none is given.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []

    templates = []
    for key, known in KNOWN_COMPONENTS.items():
        if key not in needle and needle not in key:
            continue

        chosen = version or known["versions"][0]
        template = {k: v for k, v in known.items() if k != "versions"}
        template["name"] = key
        template["version"] = chosen
        template["availableVersions"] = list(known["versions"])
        template["purl"] = known["purl"].replace(VERSION_PLACEHOLDER, chosen)
        template["cpe"] = known["cpe"].replace(VERSION_PLACEHOLDER, chosen)
        templates.append(template)

    return templates
