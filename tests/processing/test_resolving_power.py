import unittest

from MSIConfig.metadata.experiment_metadata import ResolvingPower
from MSIConfig.processing.resolving_power import (
    RESOL_POWER_PARAMS,
    RP200_THRESHOLDS,
    RP200_TIERS,
    FTICR,
    ORBITRAP,
    rp_at_200,
    select_resolution_params,
    select_tier,
)


class TestRpAt200(unittest.TestCase):
    def test_fticr(self):
        # RP falls off as 1/m: 50000 at m/z 400 is 100000 at m/z 200
        rp200 = rp_at_200(FTICR, ResolvingPower(mz=400.0, resolving_power=50000.0))
        self.assertAlmostEqual(rp200, 100000.0)

    def test_orbitrap(self):
        rp200 = rp_at_200(ORBITRAP, ResolvingPower(mz=800.0, resolving_power=140000.0))
        self.assertAlmostEqual(rp200, 280000.0)

    def test_other_analyzer_is_not_normalized(self):
        rp200 = rp_at_200("TOF", ResolvingPower(mz=800.0, resolving_power=30000.0))
        self.assertEqual(rp200, 30000.0)

    def test_analyzer_name_is_case_sensitive(self):
        rp200 = rp_at_200("orbitrap", ResolvingPower(mz=800.0, resolving_power=140000.0))
        self.assertEqual(rp200, 140000.0)


class TestSelectTier(unittest.TestCase):
    def test_thresholds_are_exclusive_upper_bounds(self):
        for i, threshold in enumerate(RP200_THRESHOLDS):
            with self.subTest(threshold=threshold):
                self.assertEqual(select_tier(threshold - 1), RP200_TIERS[i])
                self.assertEqual(select_tier(threshold), RP200_TIERS[i + 1])

    def test_tier_names(self):
        self.assertEqual(select_tier(85000 - 1), "70K")
        self.assertEqual(select_tier(85000), "100K")
        self.assertEqual(select_tier(120000), "140K")
        self.assertEqual(select_tier(195000), "250K")
        self.assertEqual(select_tier(265000), "280K")
        self.assertEqual(select_tier(390000), "500K")
        self.assertEqual(select_tier(625000), "750K")
        self.assertEqual(select_tier(875000), "1000K")

    def test_extremes(self):
        self.assertEqual(select_tier(1.0), "70K")
        self.assertEqual(select_tier(1000000), "1000K")
        self.assertEqual(select_tier(10 ** 9), "1000K")

    def test_every_selectable_tier_has_parameters(self):
        for tier in RP200_TIERS:
            self.assertIn(tier, RESOL_POWER_PARAMS)

    def test_select_resolution_params(self):
        params = select_resolution_params(100000)
        self.assertEqual(params, RESOL_POWER_PARAMS["100K"])
        self.assertEqual(params.pts_per_mz, 2885)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            RESOL_POWER_PARAMS["70K"] = None


if __name__ == "__main__":
    unittest.main()
