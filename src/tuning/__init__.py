"""
どこで: `tuning` パッケージ（ランタイム設定ストアと性能モニタの中核）。
何を: 設定ドキュメント/クランプ規則/永続化コーデック（settings）、ローリング FPS 集計（metrics）、
      変更→適用ディスパッチを担う SettingsStore（store）、フレーム駆動の基盤（core）を束ねる。
なぜ: 描画/入出力などの外部配線から独立した「不変条件を持つ部分」だけを一箇所に閉じ込めるため。
"""

__version__ = "0.3.0"
