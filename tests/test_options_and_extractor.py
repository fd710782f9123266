from sizefinder.schemas.size import MeasurementsInfo, SizesInfo
from sizefinder.services.document import parse_document
from sizefinder.services.extractor import extract_size_information
from sizefinder.services.options import find_size_options


SELECT_HTML = """
<form>
  <select name="product-size">
    <option>Choose a size</option>
    <option>S</option>
    <option>M</option>
    <option>L</option>
  </select>
</form>
"""


def test_find_size_options_from_select():
    assert find_size_options(parse_document(SELECT_HTML)) == ["S", "M", "L"]


def test_find_size_options_select_name_case_insensitive():
    doc = parse_document('<select name="Size"><option>xs</option><option>xl</option></select>')
    assert find_size_options(doc) == ["XS", "XL"]


def test_find_size_options_buttons_and_data_attribute_dedupe():
    html = """
    <ul>
      <li class="size-option">M</li>
      <li class="size-option">Large (L)</li>
      <li class="size-option">Medium</li>
    </ul>
    <button data-variant-type="size">m</button>
    <button data-variant-type="size">XL</button>
    """
    assert find_size_options(parse_document(html)) == ["M", "L", "XL"]


def test_find_size_options_none():
    doc = parse_document("<div class='colour-option'>Red</div><select name='qty'><option>1</option></select>")
    assert find_size_options(doc) == []


def test_extract_measurements_from_chart():
    html = """
    <table>
      <tr><th>Size</th> <th>Chest</th> <th>Length</th></tr>
      <tr><td>S</td> <td>36</td> <td>27</td></tr>
      <tr><td>M</td> <td>40</td> <td>28</td></tr>
    </table>
    """
    info = extract_size_information(parse_document(html).find("table"))
    assert isinstance(info, MeasurementsInfo)
    assert info.data.chest == 36.0
    assert info.data.length == 36.0
    assert info.data.shoulders is None


def test_extract_accepts_partial_measurements():
    info = extract_size_information(parse_document("<p>Bust: 34 in</p>").find("p"))
    assert isinstance(info, MeasurementsInfo)
    assert info.data.chest == 34.0
    assert info.data.shoulders is None
    assert info.data.length is None


def test_extract_prefers_measurements_over_tokens():
    info = extract_size_information(parse_document("<div>S M L Chest 38</div>").find("div"))
    assert isinstance(info, MeasurementsInfo)
    assert info.data.chest == 38.0


def test_extract_size_list():
    info = extract_size_information(parse_document("<p>Available in XS, S and M</p>").find("p"))
    assert isinstance(info, SizesInfo)
    assert info.sizes == ["XS", "S", "M"]


def test_extract_nothing():
    assert extract_size_information(parse_document("<p>Free shipping on orders</p>").find("p")) is None
    assert extract_size_information(None) is None


def test_extract_size_list_from_adjacent_cells():
    html = "<table><tr><td>S</td><td>M</td><td>L</td></tr></table>"
    info = extract_size_information(parse_document(html).find("table"))
    assert isinstance(info, SizesInfo)
    assert info.sizes == ["S", "M", "L"]
