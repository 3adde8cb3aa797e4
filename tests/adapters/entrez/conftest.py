from __future__ import annotations

import pytest


@pytest.fixture
def esummary_payload() -> dict[str, object]:
    return {
        "header": {"type": "esummary", "version": "0.3"},
        "result": {
            "uids": ["12345678"],
            "12345678": {
                "uid": "12345678",
                "pubdate": "2018 Dec",
                "source": "J Test",
                "authors": [{"name": "Doe J", "authtype": "Author"}],
                "title": "A study of things.",
                "volume": "12",
                "issue": "3",
                "pages": "100-110",
                "issn": "1234-5678",
                "essn": "8765-4321",
                "fulljournalname": "Journal of Testing",
                "articleids": [
                    {"idtype": "pubmed", "idtypen": 1, "value": "12345678"},
                    {"idtype": "doi", "idtypen": 3, "value": "10.1000/jt.2018.12"},
                    {"idtype": "pmc", "idtypen": 8, "value": "PMC9876543"},
                ],
            },
        },
    }
