import contextlib
import json
import tempfile
import unittest
from pathlib import Path

from basemodel import BaseModel, Decoder, Settings, create_container, use_container
from basemodel.infrastructure.metrics import MetricsClient


class Config(BaseModel):
    def set_up(self):
        self.timeout = 10
        self.name = "default"

    def set_with_dict(self, mapping):
        self.timeout = mapping.get("timeout", self.timeout)
        self.name = mapping.get("name", self.name)

    def set_with_decoder(self, decoder):
        self.timeout = decoder.decode("timeout", self.timeout)
        self.name = decoder.decode("name", self.name)

    def encode_with_encoder(self, encoder):
        encoder.encode("timeout", self.timeout)
        encoder.encode("name", self.name)


class Playlist(BaseModel):
    def set_up(self):
        self.tracks = []
        self.settings = Config()

    def set_with_list(self, sequence):
        self.tracks = list(sequence)

    def set_with_decoder(self, decoder):
        self.tracks = decoder.decode("tracks", self.tracks)
        self.settings = decoder.decode("settings", self.settings)

    def encode_with_encoder(self, encoder):
        encoder.encode("tracks", self.tracks)
        encoder.encode("settings", self.settings)


class Empty(BaseModel):
    pass


class BaseModelTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.base = Path(self.tmpdir.name)
        self.settings = Settings(resource_dir=self.base / "resources", save_dir=self.base / "saves")
        self.settings.resource_dir.mkdir()
        self.container = create_container(self.settings, metrics=MetricsClient(enabled=False))
        stack = contextlib.ExitStack()
        self.addCleanup(stack.close)
        stack.enter_context(use_container(self.container))

    def write_resource(self, name, payload):
        (self.settings.resource_dir / name).write_text(json.dumps(payload), encoding="utf-8")


class ConstructionTests(BaseModelTestCase):
    def test_constructor_and_factories_run_cascade(self):
        self.assertEqual(Config().timeout, 10)
        self.assertEqual(Config({"timeout": 30}).timeout, 30)
        self.assertEqual(Config.instance().timeout, 10)
        self.assertEqual(Config.from_dict({"name": "x"}).name, "x")
        self.assertEqual(Playlist.from_list(["a", "b"]).tracks, ["a", "b"])
        self.assertEqual(Config.from_decoder(Decoder({"timeout": 3})).timeout, 3)

    def test_model_without_hooks(self):
        empty = Empty({"ignored": True})
        self.assertIsNone(empty.unique_id)
        self.assertIn("Empty", repr(empty))

    def test_duplicate_unique_ids_are_allowed(self):
        first, second = Config(), Config()
        first.unique_id = second.unique_id = "dup"
        first.save()
        second.save()
        self.assertEqual(Config.load("dup").timeout, 10)

    def test_default_file_names(self):
        self.assertEqual(Config.resource_file(), "Config.json")
        self.assertEqual(Config.save_file(), "Config.json")
        self.assertEqual(Config.save_file_for_id("42"), "Config-42.json")


class SharedInstanceTests(BaseModelTestCase):
    def test_bootstraps_from_resource_file(self):
        self.write_resource("Config.json", {"timeout": 30})

        self.assertFalse(Config.has_shared_instance())
        shared = Config.shared_instance()

        self.assertEqual(shared.timeout, 30)
        self.assertIs(Config.shared_instance(), shared)
        self.assertTrue(Config.has_shared_instance())

    def test_set_and_reload_notify(self):
        events = []
        self.container.notifications.subscribe(events.append, model_type=Config)
        override = Config({"timeout": 99})

        Config.set_shared_instance(override)
        self.assertIs(Config.shared_instance(), override)
        reloaded = Config.reload_shared_instance()

        self.assertIsNot(reloaded, override)
        self.assertIsNot(Config.shared_instance(), override)
        self.assertEqual(len(events), 2)

    def test_save_of_shared_instance_survives_reload(self):
        shared = Config.shared_instance()
        shared.timeout = 45

        path = shared.save()

        self.assertEqual(path, self.settings.save_dir / "Config.json")
        self.assertEqual(Config.reload_shared_instance().timeout, 45)

    def test_corrupted_save_file_falls_back_to_resource(self):
        self.write_resource("Config.json", {"timeout": 30})
        shared = Config.shared_instance()
        shared.save()
        save_path = self.settings.save_dir / "Config.json"
        save_path.write_bytes(b"\x00\x01not an archive anymore")

        self.assertEqual(Config.from_file(save_path).timeout, 30)
        self.assertEqual(Config.reload_shared_instance().timeout, 30)

    def test_isolated_containers_do_not_share_slots(self):
        shared = Config.shared_instance()
        other = create_container(
            Settings(resource_dir=self.base / "other", save_dir=self.base / "other-saves"),
            metrics=MetricsClient(enabled=False),
        )
        with use_container(other):
            self.assertFalse(Config.has_shared_instance())
            self.assertIsNot(Config.shared_instance(), shared)
        self.assertIs(Config.shared_instance(), shared)


class PersistenceTests(BaseModelTestCase):
    def test_individual_save_and_load(self):
        config = Config({"timeout": 5, "name": "mine"})

        path = config.save()

        self.assertTrue(config.unique_id)
        self.assertEqual(path.name, f"Config-{config.unique_id}.json")
        loaded = Config.load(config.unique_id)
        self.assertEqual((loaded.timeout, loaded.name, loaded.unique_id), (5, "mine", config.unique_id))

    def test_write_to_file_and_from_file(self):
        config = Config({"timeout": 31})
        path = self.base / "exports" / "config.archive"

        config.write_to_file(path, atomic=False)

        self.assertEqual(Config.from_file(path).timeout, 31)

    def test_nested_models_round_trip(self):
        playlist = Playlist(["intro", "outro"])
        playlist.settings.timeout = 77
        path = self.base / "playlist.json"

        playlist.write_to_file(path)
        loaded = Playlist.from_file(path)

        self.assertEqual(loaded.tracks, ["intro", "outro"])
        self.assertIsInstance(loaded.settings, Config)
        self.assertEqual(loaded.settings.timeout, 77)

    def test_missing_file_yields_defaults(self):
        loaded = Config.from_file(self.base / "nowhere.json")
        self.assertEqual((loaded.timeout, loaded.name), (10, "default"))


if __name__ == "__main__":
    unittest.main()
