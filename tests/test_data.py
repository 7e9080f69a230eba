import numpy as np
import pytest

from adaptive_rff import (
    CyclicData,
    DataSet,
    FixedData,
    MinibatchData,
    get_scalings,
    make_provider,
    rescale_data,
    scale_data,
)


def _data(n=20, d=2, seed=0):
    rng = np.random.default_rng(seed)
    x = rng.normal(size=(n, d))
    y = np.exp(-np.sum(x**2, axis=1)) + 0.5j * x[:, 0]
    return DataSet(x, y)


def test_dataset_is_read_only_copy():
    x = np.linspace(0.0, 1.0, 5)
    data = DataSet(x, x**2)
    assert data.x.shape == (5, 1)
    assert data.y.dtype == complex
    with pytest.raises(ValueError):
        data.x[0, 0] = 1.0
    x[0] = 99.0
    assert data.x[0, 0] == 0.0


def test_dataset_length_mismatch_raises():
    with pytest.raises(ValueError, match="x has 3 samples but y has 2"):
        DataSet(np.zeros(3), np.zeros(2))


def test_scalings_center_and_normalize():
    data = _data(n=50)
    scalings = get_scalings(data)
    scaled = scale_data(data, scalings)

    assert np.allclose(scaled.x.mean(axis=0), 0.0)
    assert np.allclose(scaled.x.var(axis=0, ddof=1), 1.0)
    assert abs(scaled.y.mean()) < 1e-12
    assert np.sum(np.abs(scaled.y) ** 2) / (scaled.size - 1) == pytest.approx(1.0)

    back = rescale_data(scaled, scalings)
    assert np.allclose(back.x, data.x)
    assert np.allclose(back.y, data.y)


def test_scalings_reject_constant_data():
    data = DataSet(np.ones(4), np.arange(4.0))
    with pytest.raises(ValueError, match="zero variance"):
        get_scalings(data)


def test_fixed_provider_returns_same_dataset():
    data = _data()
    provider = FixedData(data)
    rng = np.random.default_rng(0)
    assert provider(1, rng) is data
    assert provider(7, rng) is data


def test_cyclic_provider_round_robin():
    sets = [_data(seed=s) for s in range(3)]
    provider = CyclicData(sets)
    rng = np.random.default_rng(0)
    got = [provider(epoch, rng) for epoch in range(1, 8)]
    expected = [0, 1, 2, 0, 1, 2, 0]
    assert all(g is sets[i] for g, i in zip(got, expected))


def test_cyclic_unequal_sizes_warn_or_raise():
    sets = [_data(n=10), _data(n=12)]
    with pytest.warns(UserWarning, match="unequal sizes"):
        CyclicData(sets)
    with pytest.raises(ValueError, match="unequal sizes"):
        CyclicData(sets, strict=True)


def test_cyclic_rejects_empty_and_mixed_dimensions():
    with pytest.raises(ValueError, match="at least one"):
        CyclicData([])
    with pytest.raises(ValueError, match="input dimension"):
        CyclicData([_data(d=1), _data(d=2)])


def test_minibatch_draws_distinct_indices():
    data = DataSet(np.arange(30.0), np.arange(30.0))
    provider = MinibatchData(data, 10)
    rng = np.random.default_rng(5)
    for epoch in range(1, 6):
        batch = provider(epoch, rng)
        assert batch.size == 10
        xs = batch.x[:, 0]
        assert np.unique(xs).size == 10
        assert np.all(np.diff(xs) > 0)


def test_minibatch_full_size_is_full_dataset():
    data = _data(n=15)
    provider = MinibatchData(data, 15)
    batch = provider(1, np.random.default_rng(0))
    assert np.array_equal(batch.x, data.x)
    assert np.array_equal(batch.y, data.y)


def test_minibatch_too_large_raises_at_construction():
    with pytest.raises(ValueError, match="exceeds the number of samples"):
        MinibatchData(_data(n=5), 6)
    with pytest.raises(ValueError, match="must be positive"):
        MinibatchData(_data(n=5), 0)


def test_make_provider_dispatch():
    data = _data()
    assert isinstance(make_provider(data), FixedData)
    assert isinstance(make_provider(data, batch_size=4), MinibatchData)
    assert isinstance(make_provider([data, data]), CyclicData)
    with pytest.raises(TypeError, match="batch_size"):
        make_provider([data], batch_size=4)
    with pytest.raises(TypeError, match="DataSet"):
        make_provider(np.zeros(3))
