import pytest

from statduel.dataset import Dataset, DatasetError, DatasetHandle, load_dataset


def test_null_values_are_absent(sample_dataset):
    assert sample_dataset.value('AAA', 'literacyRate') is None
    assert 'literacyRate' not in sample_dataset.countries['AAA']
    assert sample_dataset.value('CCC', 'literacyRate') == 88.1


def test_country_codes_keep_file_order(sample_dataset):
    assert list(sample_dataset.country_codes) == ['AAA', 'BBB', 'CCC', 'DDD']
    assert list(sample_dataset.indicators) == ['population', 'gdpPerCapita', 'literacyRate']


def test_shared_indicators_follow_indicator_order(sample_dataset):
    assert sample_dataset.shared_indicators('AAA', 'BBB') == ['population', 'gdpPerCapita']
    assert sample_dataset.shared_indicators('CCC', 'DDD') == ['population']
    assert sample_dataset.shared_indicators('AAA', 'ZZZ') == []


def test_indicator_year(sample_dataset):
    assert sample_dataset.indicator_year('population') == 2023
    assert sample_dataset.indicator_year('literacyRate') is None


def test_dataset_is_read_only(sample_dataset):
    with pytest.raises(TypeError):
        sample_dataset.countries['AAA']['population'] = 99
    with pytest.raises(TypeError):
        sample_dataset.countries['EEE'] = {}


def test_non_numeric_value_rejected():
    raw = {'indicators': ['pop'], 'countries': {'A': {'pop': 'ten'}, 'B': {'pop': 1}}}
    with pytest.raises(DatasetError):
        Dataset.from_dict(raw)


def test_non_finite_value_rejected():
    raw = {'indicators': ['pop'], 'countries': {'A': {'pop': float('nan')}, 'B': {'pop': 1}}}
    with pytest.raises(DatasetError):
        Dataset.from_dict(raw)


def test_needs_two_countries_and_an_indicator():
    with pytest.raises(DatasetError):
        Dataset.from_dict({'indicators': ['pop'], 'countries': {'A': {'pop': 1}}})
    with pytest.raises(DatasetError):
        Dataset.from_dict({'indicators': [], 'countries': {'A': {}, 'B': {}}})


def test_load_dataset_from_file(dataset_file):
    ds = load_dataset(dataset_file)
    assert len(ds) == 4
    assert ds.value('DDD', 'population') == 40


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(DatasetError):
        load_dataset(str(tmp_path / 'nope.json'))


def test_load_dataset_invalid_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"countries": ', encoding='utf-8')
    with pytest.raises(DatasetError):
        load_dataset(str(path))


def test_handle_loads_once(dataset_file):
    handle = DatasetHandle(path=dataset_file)
    assert not handle.loaded
    first = handle.get()
    assert handle.loaded
    assert handle.get() is first
