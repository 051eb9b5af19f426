"""Shared test fixtures for the catalog test suite."""

import pandas as pd
import pytest

from utils.data_loader import records_to_dataframe


@pytest.fixture
def catalog_csv():
    """A feed export with a preamble, a multi-line quoted cell and a blank row."""
    return (
        "\ufeffPrice list 2024,,,\r\n"
        "Generated automatically,,,\r\n"
        "PartNumber,Brand,Pret client in lei/buc,PartDescription,7001\r\n"
        'W-001,Alutec,"1.234,56","Grip 17"" black\nmatt",4\r\n'
        ",,,,\r\n"
        "W-002,Borbet,899,Borbet LX,0\r\n"
        ",Orphan,100,No part number,1\r\n"
    )


def make_product(part, brand="Alutec", finish="Black", size="17", pcd="5x112",
                 width="7.5", offset="35", description="", ean=""):
    return {
        "PartNumber": part,
        "Brand": brand,
        "Finish": finish,
        "Size": size,
        "PCD": pcd,
        "Width": width,
        "Offset": offset,
        "PartDescription": description,
        "EAN": ean,
    }


@pytest.fixture
def products_df():
    """Eight wheels across two brands with a staggered fitment on the BMW sizes."""
    return records_to_dataframe([
        make_product("A1", description="Grip black", ean="4000000000011"),
        make_product("A2", finish="Silver", width="8", offset="40", description="Grip silver"),
        make_product("A3", size="18", width="8", offset="45", description="Monstr"),
        make_product("A4", size="19", pcd="5x120", width="8.5", offset="30"),
        make_product("B1", brand="Borbet", finish="Silver", size="18", pcd="5x120", width="9", offset="44"),
        make_product("B2", brand="Borbet", finish="Silver", size="18", pcd="5x120", width="10", offset="40"),
        make_product("B3", brand="Borbet", finish="Graphite", size="18", pcd="5x120", width="9", offset="20"),
        make_product("B4", brand="Borbet", finish="Graphite", size="9", pcd="5x120", width="", offset=""),
    ])


@pytest.fixture
def empty_df():
    return pd.DataFrame()
