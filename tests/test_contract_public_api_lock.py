from __future__ import annotations

import unittest


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_module_exports_are_present(self) -> None:
        import rescal.api as api

        self.assertTrue(hasattr(api, "__all__"))
        self.assertIsInstance(api.__all__, (list, tuple))
        self.assertEqual(len(api.__all__), len(set(api.__all__)))

        for name in api.__all__:
            self.assertIsInstance(name, str)
            self.assertTrue(hasattr(api, name), f"rescal.api missing public name: {name}")
            obj = getattr(api, name)
            self.assertIsNotNone(obj, f"rescal.api {name} is None")

    def test_core_operations_are_public(self) -> None:
        import rescal.api as api

        for name in ("partition", "normalize", "project", "DragController", "on_resize"):
            self.assertIn(name, api.__all__)
        for method in ("drag_start", "drag_move", "drag_end", "state"):
            self.assertTrue(hasattr(api.DragController, method), method)

    def test_package_reexports_match_api_all(self) -> None:
        import rescal
        import rescal.api as api

        for name in api.__all__:
            self.assertTrue(hasattr(rescal, name), f"rescal package does not re-export: {name}")
            self.assertIs(getattr(rescal, name), getattr(api, name), f"rescal.{name} must be same object as rescal.api.{name}")


if __name__ == "__main__":
    unittest.main(verbosity=2)
