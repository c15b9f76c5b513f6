import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.app import app


# Raw universe, as a client would post it
@pytest.fixture
def raw_universe():
    return {
        "metadata": {"name": "  Efashion  ", "description": "Univers de démonstration"},
        "classes": [
            {
                "name": "Ventes",
                "description": "Indicateurs de vente",
                "objects": [
                    {
                        "name": "Marge",
                        "type": "measure",
                        "description": "Marge commerciale",
                        "sql": "SUM(fact_sales.margin)",
                    },
                    {
                        "name": "Chiffre d'affaires",
                        "type": "measure",
                        "description": "Revenu total",
                        "sql": "SUM(fact_sales.amount)",
                    },
                ],
            },
            {
                "name": "Magasin",
                "objects": [
                    {"name": "Ville", "type": "dimension", "sql": "outlet.city"},
                ],
            },
        ],
        "tables": [
            {"name": "fact_sales", "description": "Faits de vente"},
            {"name": "outlet", "description": "Magasins"},
        ],
        "joins": [
            {
                "name": "sales_outlet",
                "from": "fact_sales",
                "to": "outlet",
                "expression": "fact_sales.outlet_id = outlet.id",
            },
        ],
    }


@pytest_asyncio.fixture(scope="function")
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
