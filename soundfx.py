import os

from navigator import EffectKind


CUE_SOUNDS = {
    EffectKind.BLOCKED: ["blocked", "bump"],
    EffectKind.PICKUP: ["pickup", "pickup_trash"],
    EffectKind.ERROR: ["error", "buzz"],
    EffectKind.LEVEL_COMPLETE: ["star", "level_complete"],
}

CUE_VOLUMES = {
    EffectKind.BLOCKED: 1.0,
    EffectKind.PICKUP: 0.5,
    EffectKind.ERROR: 0.5,
    EffectKind.LEVEL_COMPLETE: 0.5,
}


def load_first_sfx(app, base_names: list[str]):
    for base in base_names:
        candidates = [base]
        if "." not in base.split("/")[-1]:
            candidates.extend([f"{base}.wav", f"{base}.ogg", f"{base}.mp3"])
        for path in candidates:
            if not os.path.exists(path):
                continue
            sfx = app.loader.loadSfx(path)
            if sfx:
                return sfx
    return None


def load_cue_sounds(app, sound_dir: str = "soundfx") -> dict:
    sounds = {}
    for kind, names in CUE_SOUNDS.items():
        sfx = load_first_sfx(app, [os.path.join(sound_dir, name) for name in names])
        if sfx is None:
            print(f"[audio] No sound for '{kind.value}' in {sound_dir}/, cue will be silent")
            continue
        sounds[kind] = sfx
    return sounds


def play_sound(sound, volume: float) -> None:
    if not sound:
        return
    sound.stop()
    sound.setVolume(max(0.0, min(1.0, volume)))
    sound.play()


def play_cue(sounds: dict, kind: EffectKind) -> bool:
    sound = sounds.get(kind)
    if sound is None:
        return False
    play_sound(sound, CUE_VOLUMES.get(kind, 0.5))
    return True
