# wheel_catalog/utils/columns.py
# Column names as they appear in the exported price list.

PART_NUMBER = "PartNumber"
DESCRIPTION = "PartDescription"
BRAND = "Brand"
PRICE = "Pret client in lei/buc"
EAN = "EAN"
FINISH = "Finish"
SIZE = "Size"
PCD = "PCD"
WIDTH = "Width"
OFFSET = "Offset"
STOCK_WAREHOUSE = "7001"
STOCK_IN_TRANSIT = "On the water"

IMAGE_COLUMNS = ("Image URL", "Image URL 1", "Image URL 2", "Image URL 3", "Image URL 4")

# Lower-cased names that must all be present in the header row
HEADER_ANCHORS = (PART_NUMBER.lower(), BRAND.lower(), PRICE.lower())

SEARCH_COLUMNS = (DESCRIPTION, PART_NUMBER, EAN)
