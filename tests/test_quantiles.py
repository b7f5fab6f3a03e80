"""Tests for the quantile wrappers."""

import pytest

from bincov.core.errors import NumericalDomainError
from bincov.model.estimators import ModifiedClopperPearsonInterval
from bincov.model.quantiles import f_ppf, normal_ppf, two_sided_z


class TestNormalQuantile:
    """Tests for the standard normal inverse CDF."""

    def test_known_critical_value(self):
        """97.5% quantile is 1.96."""
        assert normal_ppf(0.975) == pytest.approx(1.959964, abs=1e-6)

    def test_two_sided_z(self):
        """Two-sided 95% interval uses the 97.5% quantile."""
        assert two_sided_z(0.95) == pytest.approx(normal_ppf(0.975))

    @pytest.mark.parametrize("q", [0.0, 1.0, -0.1, 1.1])
    def test_probability_out_of_range(self, q):
        """Probabilities outside (0, 1) are rejected."""
        with pytest.raises(NumericalDomainError):
            normal_ppf(q)


class TestFQuantile:
    """Tests for the F distribution inverse CDF."""

    def test_closed_form_case(self):
        """F(2, 2) has quantile q / (1 - q)."""
        assert f_ppf(0.975, 2, 2) == pytest.approx(39.0)

    @pytest.mark.parametrize("dfn,dfd", [(0, 2), (2, 0), (-2, 4), (0, 0)])
    def test_non_positive_degrees_of_freedom(self, dfn, dfd):
        """Zero or negative degrees of freedom are a domain error."""
        with pytest.raises(NumericalDomainError):
            f_ppf(0.975, dfn, dfd)

    def test_probability_out_of_range(self):
        """q must lie strictly inside (0, 1)."""
        with pytest.raises(NumericalDomainError):
            f_ppf(1.0, 2, 2)


class TestQuantileCache:
    """Repeated quantile lookups are served from the cache."""

    def test_f_quantile_cached(self):
        """Second call with the same arguments is a cache hit."""
        f_ppf.cache_clear()

        first = f_ppf(0.975, 12, 34)
        second = f_ppf(0.975, 12, 34)

        assert first == second
        info = f_ppf.cache_info()
        assert info.hits == 1
        assert info.misses == 1

    def test_z_cached(self):
        """Critical value is computed once per confidence level."""
        two_sided_z.cache_clear()

        for _ in range(5):
            two_sided_z(0.95)

        info = two_sided_z.cache_info()
        assert info.hits == 4
        assert info.misses == 1

    def test_estimator_reuses_quantiles(self):
        """Repeating an exact interval computes no new F quantiles."""
        estimator = ModifiedClopperPearsonInterval()
        estimator.create_interval(100, 5, 0.95)
        misses = f_ppf.cache_info().misses

        estimator.create_interval(100, 5, 0.95)

        assert f_ppf.cache_info().misses == misses

    def test_domain_errors_still_raised(self):
        """Failed lookups raise on every call."""
        for _ in range(2):
            with pytest.raises(NumericalDomainError):
                f_ppf(0.975, 0, 2)
