# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import pytest
from hacker_ostree.overlays import OverlayManager
from hacker_ostree.packages import errors


@pytest.fixture
def overlay_manager(overlay_dirs, repositories, installed_packages, fake_runner):
    return OverlayManager(
        dirs=overlay_dirs,
        repositories=repositories,
        installed_packages=installed_packages,
        runner=fake_runner,
    )


def _dpkg_install(overlay_dirs, package_name):
    return [
        "dpkg",
        "--instdir",
        str(overlay_dirs.overlay_dir),
        "--force-not-root",
        "--force-overwrite",
        "-i",
        str(overlay_dirs.archives_dir / f"{package_name}_1.0_all.deb"),
    ]


def test_update_cache(overlay_manager, fake_runner, overlay_dirs):
    overlay_manager.update_cache()

    assert fake_runner.commands() == [["apt-get", "update"]]
    assert overlay_dirs.archives_dir.is_dir()
    assert overlay_dirs.overlay_dir.is_dir()


class TestInstall:
    def test_install(
        self, overlay_manager, fake_runner, overlay_dirs, installed_packages
    ):
        overlay_manager.install("htop")

        assert fake_runner.commands() == [
            ["apt-get", "update"],
            ["apt-get", "download", "htop"],
            _dpkg_install(overlay_dirs, "htop"),
        ]
        assert installed_packages.load() == ["htop"]

    def test_install_twice(self, overlay_manager, installed_packages):
        overlay_manager.install("htop")
        overlay_manager.install("htop")

        assert installed_packages.load() == ["htop"]

    def test_install_refresh_error(
        self, overlay_manager, fake_runner, installed_packages
    ):
        fake_runner.fail("apt-get", "update")

        with pytest.raises(errors.PackageListRefreshError):
            overlay_manager.install("htop")

        assert fake_runner.commands() == [["apt-get", "update"]]
        assert installed_packages.load() == []

    def test_install_archive_not_found(
        self, overlay_manager, fake_runner, installed_packages
    ):
        installed_packages.save(["vim"])
        fake_runner.download_archives = False

        with pytest.raises(errors.PackageArchiveNotFound) as raised:
            overlay_manager.install("foo")

        assert str(raised.value) == "No .deb file found for foo."
        assert installed_packages.load() == ["vim"]
        assert [cmd[0] for cmd in fake_runner.calls] == ["apt-get", "apt-get"]

    def test_install_dpkg_error(self, overlay_manager, fake_runner, installed_packages):
        fake_runner.fail("dpkg")

        with pytest.raises(errors.PackageInstallError):
            overlay_manager.install("htop")

        assert installed_packages.load() == []


class TestRemove:
    def test_remove(
        self, overlay_manager, fake_runner, overlay_dirs, installed_packages
    ):
        installed_packages.save(["htop", "vim"])

        overlay_manager.remove("htop")

        assert fake_runner.calls == [
            [
                "dpkg",
                "--instdir",
                str(overlay_dirs.overlay_dir),
                "--force-not-root",
                "-r",
                "htop",
            ]
        ]
        assert installed_packages.load() == ["vim"]

    def test_remove_error(self, overlay_manager, fake_runner, installed_packages):
        installed_packages.save(["htop"])
        fake_runner.fail("dpkg")

        with pytest.raises(errors.PackageRemoveError):
            overlay_manager.remove("htop")

        assert installed_packages.load() == ["htop"]


def test_list_packages(overlay_manager, installed_packages):
    assert overlay_manager.list_packages() == []

    installed_packages.save(["htop", "vim"])

    assert overlay_manager.list_packages() == ["htop", "vim"]


def test_search(overlay_manager, fake_runner):
    fake_runner.output("apt-cache", stdout="htop - interactive processes viewer\n")

    assert overlay_manager.search("htop") == "htop - interactive processes viewer\n"
    assert fake_runner.commands() == [["apt-cache", "search", "htop"]]


class TestUpgrade:
    def test_upgrade(
        self, overlay_manager, fake_runner, overlay_dirs, installed_packages
    ):
        installed_packages.save(["a", "b"])

        overlay_manager.upgrade()

        assert fake_runner.commands() == [
            ["apt-get", "update"],
            ["apt-get", "update"],
            ["apt-get", "download", "a"],
            _dpkg_install(overlay_dirs, "a"),
            ["apt-get", "update"],
            ["apt-get", "download", "b"],
            _dpkg_install(overlay_dirs, "b"),
        ]
        assert installed_packages.load() == ["a", "b"]

    def test_upgrade_nothing_installed(self, overlay_manager, fake_runner):
        overlay_manager.upgrade()

        assert fake_runner.commands() == [["apt-get", "update"]]

    def test_upgrade_stops_on_failure(
        self, overlay_manager, fake_runner, overlay_dirs, installed_packages
    ):
        installed_packages.save(["a", "b", "c"])
        fake_runner.fail("apt-get", "download", "b")

        with pytest.raises(errors.PackageDownloadError) as raised:
            overlay_manager.upgrade()

        assert raised.value.package_name == "b"
        assert fake_runner.commands()[-1] == ["apt-get", "download", "b"]
        assert _dpkg_install(overlay_dirs, "a") in fake_runner.commands()
        assert ["apt-get", "download", "c"] not in fake_runner.commands()
        assert installed_packages.load() == ["a", "b", "c"]


def test_resync(overlay_manager, fake_runner, overlay_dirs, installed_packages):
    installed_packages.save(["htop"])

    overlay_manager.resync()

    assert fake_runner.commands() == [
        ["apt-get", "update"],
        ["apt-get", "download", "htop"],
        _dpkg_install(overlay_dirs, "htop"),
    ]
    assert installed_packages.load() == ["htop"]


def test_resync_nothing_installed(overlay_manager, fake_runner):
    overlay_manager.resync()

    assert fake_runner.calls == []


def test_clean(overlay_manager, fake_runner, overlay_dirs):
    overlay_dirs.mkdirs()
    (overlay_dirs.archives_dir / "htop_1.0_all.deb").touch()

    overlay_manager.clean()

    assert fake_runner.calls == [
        ["rm", "-rf", str(overlay_dirs.archives_dir / "htop_1.0_all.deb")]
    ]
